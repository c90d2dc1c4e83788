"""
Runtime narrowing of records by their _recordType discriminant.

The predicates only look at the discriminant; they do not validate the rest
of the record. Both record models and raw DynamoDB items are accepted.
"""
from typing import Any, Mapping, Optional

from relational_store.models.records import RecordType


def get_record_type(record: Any) -> Optional[RecordType]:
    """Return the RecordType of a record or item, or None if it has no known discriminant."""
    if isinstance(record, Mapping):
        value = record.get('_recordType')
    else:
        value = getattr(record, 'record_type', None)
    try:
        return RecordType(value)
    except ValueError:
        return None


def is_resource_record(record: Any) -> bool:
    return get_record_type(record) is RecordType.RESOURCE


def is_parent_child_relationship_record(record: Any) -> bool:
    return get_record_type(record) is RecordType.PARENT_CHILD_RELATIONSHIP


def is_collection_membership_relationship_record(record: Any) -> bool:
    return get_record_type(record) is RecordType.COLLECTION_MEMBER_RELATIONSHIP


def is_unique_key_value_record(record: Any) -> bool:
    return get_record_type(record) is RecordType.UNIQUE_KEY_VALUE
