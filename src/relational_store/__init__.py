"""
DynamoDB relational store.

Record shapes and key derivation for a single-table DynamoDB layout:
resources, parent/child and collection membership relationships, and
unique key/value constraints.

Example:
    from relational_store import create_resource

    resource = create_resource('System.Account', 1)
    table.put_item(Item=resource.to_dynamodb_item(include_indexes=True))
"""
import logging

from relational_store.config import StoreConfig, get_config, reset_config, configure_logging
from relational_store.exceptions import (
    RecordValidationError,
    InvalidFormatError,
    EmptyFieldError,
    MissingRequiredFieldError,
    ReservedAttributeError,
)
from relational_store.models import (
    PrimaryKey,
    InvertedIndexKey,
    AccountIndexKey,
    ParsedUrn,
    RecordType,
    BaseRecord,
    ResourceRecord,
    ParentChildRelationshipRecord,
    CollectionMembershipRelationshipRecord,
    UniqueKeyValueRecord,
    DynamoDBRecord,
    parse_record,
)
from relational_store.utils.clock import Clock, SystemClock, FixedClock
from relational_store.utils.uuid_v7 import (
    UuidV7Generator,
    generate_uuid_v7,
    generator_for_clock,
    is_valid_uuid_v7,
)
from relational_store.utils.urn_validator import parse_urn, create_urn, validate_urn
from relational_store.utils.timestamps import get_current_timestamp, is_valid_iso8601
from relational_store.utils.key_generation import (
    generate_resource_key,
    generate_parent_child_key,
    generate_collection_member_key,
    generate_unique_key_value_key,
    generate_inverted_index_key,
    generate_account_index_key,
)
from relational_store.utils.type_guards import (
    get_record_type,
    is_resource_record,
    is_parent_child_relationship_record,
    is_collection_membership_relationship_record,
    is_unique_key_value_record,
)
from relational_store.utils.serde_utils import to_attribute_values, from_attribute_values
from relational_store.factories import (
    create_resource,
    touch_resource,
    create_parent_child_relationship,
    create_collection_membership_relationship,
    create_unique_key_value,
    touch_unique_key_value,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'StoreConfig',
    'get_config',
    'reset_config',
    'configure_logging',
    'RecordValidationError',
    'InvalidFormatError',
    'EmptyFieldError',
    'MissingRequiredFieldError',
    'ReservedAttributeError',
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
    'Clock',
    'SystemClock',
    'FixedClock',
    'UuidV7Generator',
    'generate_uuid_v7',
    'generator_for_clock',
    'is_valid_uuid_v7',
    'parse_urn',
    'create_urn',
    'validate_urn',
    'get_current_timestamp',
    'is_valid_iso8601',
    'generate_resource_key',
    'generate_parent_child_key',
    'generate_collection_member_key',
    'generate_unique_key_value_key',
    'generate_inverted_index_key',
    'generate_account_index_key',
    'get_record_type',
    'is_resource_record',
    'is_parent_child_relationship_record',
    'is_collection_membership_relationship_record',
    'is_unique_key_value_record',
    'to_attribute_values',
    'from_attribute_values',
    'create_resource',
    'touch_resource',
    'create_parent_child_relationship',
    'create_collection_membership_relationship',
    'create_unique_key_value',
    'touch_unique_key_value',
]
