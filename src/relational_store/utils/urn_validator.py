"""
URN parsing, construction and validation.

URN format: urn:{domain}:{resourceType}::{resourceId}

None of the three components may contain a colon, and resourceId must be a
UUID v7.

Example:
    urn = create_urn('pp', 'System.Account', '01955556-3cd2-7df2-b839-693fa6fbd505')
    parsed = parse_urn(urn)
    is_valid = validate_urn(urn)
"""
import logging
import re
from typing import Any

from relational_store.exceptions import EmptyFieldError, InvalidFormatError
from relational_store.models.urn import ParsedUrn
from relational_store.utils.uuid_v7 import is_valid_uuid_v7

logger = logging.getLogger(__name__)

# Empty groups are allowed by the pattern and rejected separately with a clearer message
URN_PATTERN = re.compile(r'urn:([^:]*):([^:]*)::([^:]*)')

URN_FORMAT = "urn:{domain}:{resourceType}::{resourceId}"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_urn(urn: str) -> ParsedUrn:
    """
    Parse a URN string into its components.

    Args:
        urn: The URN string to parse

    Returns:
        ParsedUrn with trimmed domain, resource_type and resource_id

    Raises:
        EmptyFieldError: If urn is not a non-empty string
        InvalidFormatError: If the URN does not match the format or a component is empty

    Example:
        parse_urn('urn:pp:System.Account::01955556-3cd2-7df2-b839-693fa6fbd505')
        # ParsedUrn(domain='pp', resource_type='System.Account', resource_id='01955556-...')
    """
    if _is_blank(urn):
        raise EmptyFieldError("URN must be a non-empty string", field="urn", value=urn)

    match = URN_PATTERN.fullmatch(urn)
    if not match:
        raise InvalidFormatError(
            f'Invalid URN format: "{urn}". Expected format: {URN_FORMAT}',
            field="urn",
            value=urn,
        )

    domain, resource_type, resource_id = match.groups()

    for field_name, component in (
        ("domain", domain),
        ("resourceType", resource_type),
        ("resourceId", resource_id),
    ):
        if not component.strip():
            raise InvalidFormatError(
                f'Invalid URN: {field_name} cannot be empty in "{urn}"',
                field=field_name,
                value=urn,
            )

    return ParsedUrn(
        domain=domain.strip(),
        resource_type=resource_type.strip(),
        resource_id=resource_id.strip(),
    )


def create_urn(domain: str, resource_type: str, resource_id: str) -> str:
    """
    Create a URN string from its components.

    Args:
        domain: The domain identifier (e.g., 'pp')
        resource_type: The resource type (e.g., 'System.Account')
        resource_id: The resource ID in UUID v7 format

    Returns:
        The URN string with every component trimmed

    Raises:
        EmptyFieldError: If any component is empty or not a string
        InvalidFormatError: If a component contains a colon or resource_id is not a UUID v7
    """
    if _is_blank(domain):
        raise EmptyFieldError("Domain must be a non-empty string", field="domain", value=domain)

    if _is_blank(resource_type):
        raise EmptyFieldError(
            "ResourceType must be a non-empty string", field="resourceType", value=resource_type
        )

    if _is_blank(resource_id):
        raise EmptyFieldError(
            "ResourceId must be a non-empty string", field="resourceId", value=resource_id
        )

    for field_name, component in (("domain", domain), ("resourceType", resource_type)):
        if ":" in component:
            raise InvalidFormatError(
                f'Invalid {field_name}: "{component}". URN components cannot contain ":"',
                field=field_name,
                value=component,
            )

    if not is_valid_uuid_v7(resource_id.strip()):
        raise InvalidFormatError(
            f'Invalid resourceId format: "{resource_id}". '
            f'Expected UUID v7 format (xxxxxxxx-xxxx-7xxx-xxxx-xxxxxxxxxxxx)',
            field="resourceId",
            value=resource_id,
        )

    return f"urn:{domain.strip()}:{resource_type.strip()}::{resource_id.strip()}"


def validate_urn(urn: Any) -> bool:
    """
    Check whether a value is a well-formed URN with a UUID v7 resource id.

    Never raises; returns False for anything that is not a valid URN.
    """
    if _is_blank(urn):
        return False

    try:
        parsed = parse_urn(urn)
    except InvalidFormatError:
        return False

    return is_valid_uuid_v7(parsed.resource_id)
