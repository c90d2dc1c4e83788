"""
DynamoDB key generation for the single-table layout.

    Resource                      PK: Resource#{urn}                  SK: Resource#{urn}
    ParentChildRelationship       PK: Parent#{parentUrn}              SK: Child#{childUrn}
    CollectionMemberRelationship  PK: Collection#{collectionUrn}      SK: Member#{memberUrn}
    UniqueKeyValue                PK: UniqueKeyValue#{type}#{key}#{value}
                                  SK: UniqueKeyValue#{type}#{key}

    GSI1 (inverted index)         GSI1PK: SK                          GSI1SK: PK
    GSI2 (resources by account)   GSI2PK: accountUrn                  GSI2SK: urn

'#' is not escaped inside UniqueKeyValue fragments, so a resource type, key
or value containing '#' yields a key that cannot be split back unambiguously.
"""
import logging
from typing import Any, Mapping, Union

from relational_store.exceptions import EmptyFieldError, InvalidFormatError
from relational_store.models.keys import (
    KEY_SEPARATOR,
    RESOURCE_KEY_PREFIX,
    PARENT_KEY_PREFIX,
    CHILD_KEY_PREFIX,
    COLLECTION_KEY_PREFIX,
    MEMBER_KEY_PREFIX,
    UNIQUE_KEY_VALUE_KEY_PREFIX,
    AccountIndexKey,
    InvertedIndexKey,
    PrimaryKey,
)
from relational_store.utils.urn_validator import validate_urn

logger = logging.getLogger(__name__)


def _join(*parts: str) -> str:
    return KEY_SEPARATOR.join(parts)


def _require_urn(urn: Any, label: str, field: str) -> None:
    if not validate_urn(urn):
        raise InvalidFormatError(f'Invalid {label} format: "{urn}"', field=field, value=urn)


def generate_resource_key(urn: str) -> PrimaryKey:
    """
    Generate the primary key for a Resource record.

    Example:
        generate_resource_key('urn:pp:System.Account::01955556-3cd2-7df2-b839-693fa6fbd505')
        # {'PK': 'Resource#urn:pp:System.Account::0195...', 'SK': 'Resource#urn:pp:System.Account::0195...'}

    Raises:
        InvalidFormatError: If the URN is invalid
    """
    _require_urn(urn, "URN", "urn")
    key = _join(RESOURCE_KEY_PREFIX, urn)
    return {'PK': key, 'SK': key}


def generate_parent_child_key(parent_urn: str, child_urn: str) -> PrimaryKey:
    """
    Generate the primary key for a ParentChildRelationship record.

    Raises:
        InvalidFormatError: If either URN is invalid (parent is checked first)
    """
    _require_urn(parent_urn, "parent URN", "parentUrn")
    _require_urn(child_urn, "child URN", "childUrn")
    return {
        'PK': _join(PARENT_KEY_PREFIX, parent_urn),
        'SK': _join(CHILD_KEY_PREFIX, child_urn),
    }


def generate_collection_member_key(collection_urn: str, member_urn: str) -> PrimaryKey:
    """
    Generate the primary key for a CollectionMemberRelationship record.

    Raises:
        InvalidFormatError: If either URN is invalid (collection is checked first)
    """
    _require_urn(collection_urn, "collection URN", "collectionUrn")
    _require_urn(member_urn, "member URN", "memberUrn")
    return {
        'PK': _join(COLLECTION_KEY_PREFIX, collection_urn),
        'SK': _join(MEMBER_KEY_PREFIX, member_urn),
    }


def generate_unique_key_value_key(resource_type: str, key: str, value: str) -> PrimaryKey:
    """
    Generate the primary key for a UniqueKeyValue record.

    The fragments are free-form strings, not URNs; each is trimmed.

    Example:
        generate_unique_key_value_key('System.User', 'emailAddress', 'user@example.com')
        # {'PK': 'UniqueKeyValue#System.User#emailAddress#user@example.com',
        #  'SK': 'UniqueKeyValue#System.User#emailAddress'}

    Raises:
        EmptyFieldError: If any fragment is empty or whitespace-only
    """
    for field_name, label, fragment in (
        ("resourceType", "ResourceType", resource_type),
        ("key", "Key", key),
        ("value", "Value", value),
    ):
        if not isinstance(fragment, str) or not fragment.strip():
            raise EmptyFieldError(f"{label} cannot be empty", field=field_name, value=fragment)

    sort_key = _join(UNIQUE_KEY_VALUE_KEY_PREFIX, resource_type.strip(), key.strip())
    return {
        'PK': _join(sort_key, value.strip()),
        'SK': sort_key,
    }


def generate_inverted_index_key(record: Union[Mapping[str, Any], Any]) -> InvertedIndexKey:
    """
    Generate the GSI1 key by swapping a record's PK and SK.

    Accepts a record model or a raw item mapping.
    """
    if not isinstance(record, Mapping):
        record = record.primary_key()
    return {'GSI1PK': record['SK'], 'GSI1SK': record['PK']}


def generate_account_index_key(account_urn: str, urn: str) -> AccountIndexKey:
    """
    Generate the GSI2 (ResourcesByAccountIndex) key.

    Both URNs are used unchanged.

    Raises:
        InvalidFormatError: If either URN is invalid (account is checked first)
    """
    _require_urn(account_urn, "account URN", "accountUrn")
    _require_urn(urn, "URN", "urn")
    return {'GSI2PK': account_urn, 'GSI2SK': urn}
