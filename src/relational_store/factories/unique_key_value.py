"""
Factory for UniqueKeyValue records.

A UniqueKeyValue record claims a value for one property of a resource type,
e.g. the email address of a System.User. Writing it with a
"attribute_not_exists(PK)" condition is how the storage client enforces the
constraint.
"""
import logging
from typing import Optional

from relational_store.factories.validation import optional_urn, require_non_empty
from relational_store.models.records import UniqueKeyValueRecord
from relational_store.utils.clock import Clock
from relational_store.utils.key_generation import generate_unique_key_value_key
from relational_store.utils.timestamps import get_current_timestamp

logger = logging.getLogger(__name__)


def create_unique_key_value(
    resource_type: str,
    key: str,
    value: str,
    associated_record_urn: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
) -> UniqueKeyValueRecord:
    """
    Create a UniqueKeyValue record.

    resource_type, key and value are trimmed. '#' inside them is not escaped.

    Raises:
        EmptyFieldError: resource_type, key or value is empty (checked in that order)
        InvalidFormatError: a supplied associated_record_urn is not a valid URN

    Example:
        record = create_unique_key_value('System.User', 'emailAddress', 'user@example.com')
        # record.pk == 'UniqueKeyValue#System.User#emailAddress#user@example.com'
        # record.sk == 'UniqueKeyValue#System.User#emailAddress'
    """
    operation = 'create_unique_key_value'
    resource_type = require_non_empty(resource_type, "ResourceType", "resourceType", operation)
    key = require_non_empty(key, "Key", "key", operation)
    value = require_non_empty(value, "Value", "value", operation)
    associated_record_urn = optional_urn(
        associated_record_urn, "associatedRecordUrn", "associatedRecordUrn", operation
    )

    keys = generate_unique_key_value_key(resource_type, key, value)
    now = get_current_timestamp(clock)

    record = UniqueKeyValueRecord(
        pk=keys['PK'],
        sk=keys['SK'],
        resource_type=resource_type,
        key=key,
        value=value,
        associated_record_urn=associated_record_urn,
        created_at=now,
        updated_at=now,
    )
    logger.debug(f"Created UniqueKeyValue {keys['PK']}")
    return record


def touch_unique_key_value(
    record: UniqueKeyValueRecord,
    clock: Optional[Clock] = None
) -> UniqueKeyValueRecord:
    """Return a copy of the record with a refreshed _updatedAt."""
    return record.model_copy(update={'updated_at': get_current_timestamp(clock)})
