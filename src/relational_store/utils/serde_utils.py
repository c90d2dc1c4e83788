"""
Conversion between plain record items and DynamoDB attribute-value maps.

Record models produce plain items via to_dynamodb_item(); the low-level
client API (put_item on a boto3 client rather than a Table resource) expects
attribute-value maps such as {'PK': {'S': 'Resource#urn:...'}}.

Naming Conventions:
- to_X: Convert TO a format
- from_X: Convert FROM a format
"""
from decimal import Decimal
from typing import Any, Dict, Mapping

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_dynamodb_number(value: Any) -> Any:
    # TypeSerializer rejects float; DynamoDB numbers round-trip through Decimal
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamodb_number(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb_number(v) for v in value]
    return value


def _from_dynamodb_number(value: Any) -> Any:
    # Only numbers written without a fractional part become int; 2.0 stays Decimal('2.0')
    if isinstance(value, Decimal) and value.as_tuple().exponent >= 0:
        return int(value)
    if isinstance(value, dict):
        return {k: _from_dynamodb_number(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_dynamodb_number(v) for v in value]
    return value


def to_attribute_values(item: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Serialize a plain item to a DynamoDB attribute-value map.

    Example:
        to_attribute_values(record.to_dynamodb_item())
        # {'PK': {'S': 'Resource#urn:...'}, '_schemaVersion': {'N': '1'}, ...}
    """
    return {
        key: _serializer.serialize(_to_dynamodb_number(value))
        for key, value in item.items()
    }


def from_attribute_values(attribute_values: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Deserialize a DynamoDB attribute-value map to a plain item.

    Numbers come back as Decimal, except those stored without a fractional
    part (such as _schemaVersion) which are converted to int.
    """
    return {
        key: _from_dynamodb_number(_deserializer.deserialize(dict(value)))
        for key, value in attribute_values.items()
    }
