"""
Models package for the single-table record layout.
"""

from .keys import (
    PrimaryKey,
    InvertedIndexKey,
    AccountIndexKey,
)

from .urn import ParsedUrn

from .records import (
    RecordType,
    BaseRecord,
    ResourceRecord,
    ParentChildRelationshipRecord,
    CollectionMembershipRelationshipRecord,
    UniqueKeyValueRecord,
    DynamoDBRecord,
    parse_record,
)

__all__ = [
    'PrimaryKey',
    'InvertedIndexKey',
    'AccountIndexKey',
    'ParsedUrn',
    'RecordType',
    'BaseRecord',
    'ResourceRecord',
    'ParentChildRelationshipRecord',
    'CollectionMembershipRelationshipRecord',
    'UniqueKeyValueRecord',
    'DynamoDBRecord',
    'parse_record',
]
