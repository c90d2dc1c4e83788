"""
Record models for the single-table layout.

Four record variants share one table and are told apart by the _recordType
discriminant:

- Resource: a primary entity addressed by its URN
- ParentChildRelationship: a directed 1:n edge (children are deleted with the parent)
- CollectionMemberRelationship: an n:n membership edge, always account-scoped
- UniqueKeyValue: a uniqueness constraint on one property value of a resource type

Attribute names are snake_case; aliases carry the persisted field names.
"""
import copy
import enum
import logging
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator
from typing_extensions import Self

from relational_store.exceptions import ReservedAttributeError
from relational_store.models.keys import (
    INDEX_KEY_FIELDS,
    AccountIndexKey,
    InvertedIndexKey,
    PrimaryKey,
)
from relational_store.utils.key_generation import (
    generate_account_index_key,
    generate_collection_member_key,
    generate_inverted_index_key,
    generate_parent_child_key,
    generate_resource_key,
    generate_unique_key_value_key,
)
from relational_store.utils.timestamps import is_valid_iso8601
from relational_store.utils.urn_validator import parse_urn, validate_urn
from relational_store.utils.uuid_v7 import is_valid_uuid_v7

logger = logging.getLogger(__name__)


class RecordType(str, enum.Enum):
    """Discriminant values stored in _recordType"""
    RESOURCE = "Resource"
    PARENT_CHILD_RELATIONSHIP = "ParentChildRelationship"
    COLLECTION_MEMBER_RELATIONSHIP = "CollectionMemberRelationship"
    UNIQUE_KEY_VALUE = "UniqueKeyValue"


def _check_optional_urn(v: Optional[str], field_name: str) -> Optional[str]:
    if v is not None and not validate_urn(v):
        raise ValueError(f'Invalid {field_name} format: "{v}"')
    return v


def freeze_attributes(attributes: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of an attribute mapping, detached from the caller's objects."""
    return MappingProxyType(copy.deepcopy(dict(attributes)))


def _check_timestamp(v: str) -> str:
    if not is_valid_iso8601(v):
        raise ValueError(f'Invalid timestamp: "{v}". Expected ISO-8601 format (YYYY-MM-DDTHH:mm:ss.sssZ)')
    return v


class BaseRecord(BaseModel):
    """
    Fields and behaviour shared by every record variant.
    """
    pk: str = Field(alias="PK")
    sk: str = Field(alias="SK")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )

    def primary_key(self) -> PrimaryKey:
        return {'PK': self.pk, 'SK': self.sk}

    def inverted_index_key(self) -> InvertedIndexKey:
        return generate_inverted_index_key(self)

    def account_index_key(self) -> Optional[AccountIndexKey]:
        """GSI2 key, or None when the record is not part of the sparse account index."""
        return None

    def to_dynamodb_item(self, include_indexes: bool = False) -> Dict[str, Any]:
        """
        Serialize the record to a dictionary suitable for DynamoDB.

        Args:
            include_indexes: Also emit GSI1PK/GSI1SK, and GSI2PK/GSI2SK where the
                record belongs to the account index.
        """
        item = self.model_dump(mode='python', by_alias=True, exclude_none=True)
        if include_indexes:
            item.update(self.inverted_index_key())
            account_key = self.account_index_key()
            if account_key is not None:
                item.update(account_key)
        return item

    @classmethod
    def from_dynamodb_item(cls, data: Mapping[str, Any]) -> Self:
        """
        Deserialize a dictionary (from a DynamoDB item) into a record.

        Index projection fields are ignored.
        """
        item = {k: v for k, v in data.items() if k not in INDEX_KEY_FIELDS}
        return cls.model_validate(item)


class ResourceRecord(BaseRecord):
    """
    A primary entity. PK and SK are both Resource#{urn}.

    Extension attributes are held in `attributes` and flattened to the top
    level of the stored item; they may not reuse a reserved field name.
    """
    record_type: Literal["Resource"] = Field(default="Resource", alias="_recordType")
    resource_type: str = Field(alias="_resourceType", min_length=1)
    id: str = Field(alias="_id")
    urn: str
    schema_version: int = Field(alias="_schemaVersion", ge=1)
    created_at: str = Field(alias="_createdAt")
    updated_at: str = Field(alias="_updatedAt")
    account_urn: Optional[str] = Field(default=None, alias="_accountUrn")
    attributes: Mapping[str, Any] = Field(default_factory=dict, exclude=True, validate_default=True)

    @classmethod
    def reserved_field_names(cls) -> frozenset:
        names = set(INDEX_KEY_FIELDS)
        for name, field_info in cls.model_fields.items():
            names.add(name)
            if field_info.alias:
                names.add(field_info.alias)
        return frozenset(names)

    @model_validator(mode='before')
    @classmethod
    def collect_extension_attributes(cls, data: Any) -> Any:
        """Move unknown top-level fields of a stored item into `attributes`."""
        if not isinstance(data, dict):
            return data
        reserved = cls.reserved_field_names()
        attributes = dict(data.get('attributes') or {})
        fields: Dict[str, Any] = {}
        for key, value in data.items():
            if key == 'attributes' or key in INDEX_KEY_FIELDS:
                continue
            if key in reserved:
                fields[key] = value
            else:
                attributes[key] = value
        fields['attributes'] = attributes
        return fields

    @field_validator('id')
    @classmethod
    def check_id(cls, v: str) -> str:
        if not is_valid_uuid_v7(v):
            raise ValueError(f'Invalid ID format: "{v}". Expected UUID v7 format.')
        return v

    @field_validator('account_urn')
    @classmethod
    def check_account_urn(cls, v: Optional[str]) -> Optional[str]:
        return _check_optional_urn(v, 'accountUrn')

    @field_validator('created_at', 'updated_at')
    @classmethod
    def check_timestamps(cls, v: str) -> str:
        return _check_timestamp(v)

    @field_validator('attributes')
    @classmethod
    def check_attribute_names(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        collisions = sorted(set(v) & cls.reserved_field_names())
        if collisions:
            raise ReservedAttributeError(
                f"Attributes cannot override reserved fields: {', '.join(collisions)}",
                field='attributes',
                value=collisions,
            )
        return freeze_attributes(v)

    @model_validator(mode='after')
    def check_urn_and_keys(self) -> Self:
        parsed = parse_urn(self.urn)
        if parsed.resource_type != self.resource_type or parsed.resource_id != self.id:
            raise ValueError(
                f'URN "{self.urn}" does not match _resourceType "{self.resource_type}" and _id "{self.id}"'
            )
        if self.primary_key() != generate_resource_key(self.urn):
            raise ValueError(f'PK/SK do not match the keys derived from URN "{self.urn}"')
        return self

    def account_index_key(self) -> Optional[AccountIndexKey]:
        if self.account_urn is None:
            return None
        return generate_account_index_key(self.account_urn, self.urn)

    def to_dynamodb_item(self, include_indexes: bool = False) -> Dict[str, Any]:
        # Reserved fields are applied last and always win
        item = copy.deepcopy(dict(self.attributes))
        item.update(super().to_dynamodb_item(include_indexes=include_indexes))
        return item

    @property
    def domain(self) -> str:
        return parse_urn(self.urn).domain


class ParentChildRelationshipRecord(BaseRecord):
    """
    A directed 1:n hierarchical edge. PK is Parent#{parentUrn}, SK is Child#{childUrn}.

    Children are expected to be deleted together with their parent; the storage
    client carries out that cascade.
    """
    record_type: Literal["ParentChildRelationship"] = Field(
        default="ParentChildRelationship", alias="_recordType"
    )
    parent_urn: str = Field(alias="parentUrn")
    child_urn: str = Field(alias="childUrn")
    created_at: str = Field(alias="_createdAt")
    account_urn: Optional[str] = Field(default=None, alias="_accountUrn")

    # Deleting the parent deletes its children
    CASCADE_DELETE: ClassVar[bool] = True

    @field_validator('account_urn')
    @classmethod
    def check_account_urn(cls, v: Optional[str]) -> Optional[str]:
        return _check_optional_urn(v, 'accountUrn')

    @field_validator('created_at')
    @classmethod
    def check_created_at(cls, v: str) -> str:
        return _check_timestamp(v)

    @model_validator(mode='after')
    def check_keys(self) -> Self:
        if self.primary_key() != generate_parent_child_key(self.parent_urn, self.child_urn):
            raise ValueError("PK/SK do not match the keys derived from parentUrn and childUrn")
        return self


class CollectionMembershipRelationshipRecord(BaseRecord):
    """
    An n:n membership edge. PK is Collection#{collectionUrn}, SK is Member#{memberUrn}.
    """
    record_type: Literal["CollectionMemberRelationship"] = Field(
        default="CollectionMemberRelationship", alias="_recordType"
    )
    collection_urn: str = Field(alias="collectionUrn")
    member_urn: str = Field(alias="memberUrn")
    created_at: str = Field(alias="_createdAt")
    account_urn: str = Field(alias="_accountUrn")

    @field_validator('account_urn')
    @classmethod
    def check_account_urn(cls, v: str) -> str:
        if not validate_urn(v):
            raise ValueError(f'Invalid accountUrn format: "{v}"')
        return v

    @field_validator('created_at')
    @classmethod
    def check_created_at(cls, v: str) -> str:
        return _check_timestamp(v)

    @model_validator(mode='after')
    def check_keys(self) -> Self:
        if self.primary_key() != generate_collection_member_key(self.collection_urn, self.member_urn):
            raise ValueError("PK/SK do not match the keys derived from collectionUrn and memberUrn")
        return self


class UniqueKeyValueRecord(BaseRecord):
    """
    Uniqueness constraint on a (resource type, property) pair having a given value.

    PK is UniqueKeyValue#{resourceType}#{key}#{value}, SK is UniqueKeyValue#{resourceType}#{key}.
    """
    record_type: Literal["UniqueKeyValue"] = Field(default="UniqueKeyValue", alias="_recordType")
    resource_type: str = Field(alias="_resourceType", min_length=1)
    key: str = Field(min_length=1)
    value: str = Field(min_length=1)
    associated_record_urn: Optional[str] = Field(default=None, alias="associatedRecordUrn")
    created_at: str = Field(alias="_createdAt")
    updated_at: str = Field(alias="_updatedAt")

    @field_validator('associated_record_urn')
    @classmethod
    def check_associated_record_urn(cls, v: Optional[str]) -> Optional[str]:
        return _check_optional_urn(v, 'associatedRecordUrn')

    @field_validator('created_at', 'updated_at')
    @classmethod
    def check_timestamps(cls, v: str) -> str:
        return _check_timestamp(v)

    @model_validator(mode='after')
    def check_keys(self) -> Self:
        expected = generate_unique_key_value_key(self.resource_type, self.key, self.value)
        if self.primary_key() != expected:
            raise ValueError("PK/SK do not match the keys derived from _resourceType, key and value")
        return self


DynamoDBRecord = Annotated[
    Union[
        ResourceRecord,
        ParentChildRelationshipRecord,
        CollectionMembershipRelationshipRecord,
        UniqueKeyValueRecord,
    ],
    Field(discriminator='record_type'),
]

_record_adapter: TypeAdapter = TypeAdapter(DynamoDBRecord)


def parse_record(item: Mapping[str, Any]) -> Union[
    ResourceRecord,
    ParentChildRelationshipRecord,
    CollectionMembershipRelationshipRecord,
    UniqueKeyValueRecord,
]:
    """
    Validate a raw DynamoDB item into the record variant named by its _recordType.

    Raises:
        pydantic.ValidationError: If the discriminant is missing or unknown, or the
            item is not a well-formed record of that variant
    """
    return _record_adapter.validate_python(dict(item))
