"""
Key shapes for the single-table layout.

Keys are plain dicts so they can be spread straight into DynamoDB items and
Key= parameters.
"""
from typing import TypedDict


class PrimaryKey(TypedDict):
    PK: str
    SK: str


class InvertedIndexKey(TypedDict):
    """GSI1: the primary key with partition and sort roles swapped."""
    GSI1PK: str
    GSI1SK: str


class AccountIndexKey(TypedDict):
    """GSI2 (ResourcesByAccountIndex): sparse, only for records with an account URN."""
    GSI2PK: str
    GSI2SK: str


KEY_SEPARATOR = "#"

RESOURCE_KEY_PREFIX = "Resource"
PARENT_KEY_PREFIX = "Parent"
CHILD_KEY_PREFIX = "Child"
COLLECTION_KEY_PREFIX = "Collection"
MEMBER_KEY_PREFIX = "Member"
UNIQUE_KEY_VALUE_KEY_PREFIX = "UniqueKeyValue"

INDEX_KEY_FIELDS = ('GSI1PK', 'GSI1SK', 'GSI2PK', 'GSI2SK')
