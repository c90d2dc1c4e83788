"""
Factory for Resource records.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from relational_store.config import get_config
from relational_store.exceptions import InvalidFormatError, ReservedAttributeError
from relational_store.factories.validation import optional_urn, reject, require_non_empty
from relational_store.models.records import ResourceRecord, freeze_attributes
from relational_store.utils.clock import Clock
from relational_store.utils.key_generation import generate_resource_key
from relational_store.utils.timestamps import get_current_timestamp
from relational_store.utils.urn_validator import create_urn
from relational_store.utils.uuid_v7 import (
    UuidV7Generator,
    generate_uuid_v7,
    generator_for_clock,
    is_valid_uuid_v7,
)

logger = logging.getLogger(__name__)


def create_resource(
    resource_type: str,
    schema_version: int,
    resource_id: Optional[str] = None,
    account_urn: Optional[str] = None,
    attributes: Optional[Mapping[str, Any]] = None,
    *,
    domain: Optional[str] = None,
    clock: Optional[Clock] = None,
    id_generator: Optional[UuidV7Generator] = None,
) -> ResourceRecord:
    """
    Create a Resource record.

    A UUID v7 id is generated when `resource_id` is not supplied. The URN is
    urn:{domain}:{resource_type}::{resource_id}, and PK and SK are both Resource#{urn}.
    Creation and update timestamps are the same instant.

    Args:
        resource_type: Resource type such as 'System.Account'
        schema_version: Schema version of the resource, an integer >= 1
        resource_id: Optional UUID v7 to use instead of generating one
        account_urn: Optional URN of the owning account
        attributes: Extension attributes stored at the top level of the item
        domain: URN domain; defaults to the configured domain ('pp')
        clock: Clock for timestamps and id generation
        id_generator: Generator for new ids

    Returns:
        The new ResourceRecord

    Raises:
        EmptyFieldError: resource_type is empty
        InvalidFormatError: schema_version is not a positive integer, resource_id is not a
            UUID v7, or account_urn is not a valid URN
        ReservedAttributeError: an attribute name collides with a reserved field

    Example:
        resource = create_resource('System.Account', 1, attributes={'name': 'My Account'})
    """
    operation = 'create_resource'
    resource_type = require_non_empty(resource_type, "ResourceType", "resourceType", operation)

    if isinstance(schema_version, bool) or not isinstance(schema_version, int) or schema_version < 1:
        reject(
            InvalidFormatError(
                f"SchemaVersion must be a positive integer, got {schema_version!r}",
                field="schemaVersion",
                value=schema_version,
            ),
            operation
        )

    if resource_id is not None and not is_valid_uuid_v7(resource_id):
        reject(
            InvalidFormatError(
                f'Invalid ID format: "{resource_id}". Expected UUID v7 format.', field="id", value=resource_id
            ),
            operation
        )

    account_urn = optional_urn(account_urn, "accountUrn", "accountUrn", operation)

    extension: Dict[str, Any] = dict(attributes or {})
    collisions = sorted(set(extension) & ResourceRecord.reserved_field_names())
    if collisions:
        reject(
            ReservedAttributeError(
                f"Attributes cannot override reserved fields: {', '.join(collisions)}",
                field="attributes",
                value=collisions,
            ),
            operation
        )

    if resource_id is None:
        resource_id = generate_uuid_v7(id_generator or generator_for_clock(clock))

    urn = create_urn(domain or get_config().urn_domain, resource_type, resource_id)
    keys = generate_resource_key(urn)
    now = get_current_timestamp(clock)

    record = ResourceRecord(
        pk=keys['PK'],
        sk=keys['SK'],
        resource_type=resource_type,
        id=resource_id,
        urn=urn,
        schema_version=schema_version,
        created_at=now,
        updated_at=now,
        account_urn=account_urn,
        attributes=extension,
    )
    logger.debug(f"Created Resource record {urn}")
    return record


def touch_resource(record: ResourceRecord, clock: Optional[Clock] = None) -> ResourceRecord:
    """
    Return a copy of the record with a refreshed _updatedAt.

    Records are immutable; an update is a new record with the same keys.
    """
    return record.model_copy(update={
        'updated_at': get_current_timestamp(clock),
        'attributes': freeze_attributes(record.attributes),
    })
