"""
Record factories.

Each factory validates its input in a fixed order, derives the record's keys
and stamps timestamps, returning an immutable record model.
"""
from .resource import create_resource, touch_resource
from .relationships import (
    create_parent_child_relationship,
    create_collection_membership_relationship,
)
from .unique_key_value import create_unique_key_value, touch_unique_key_value

__all__ = [
    'create_resource',
    'touch_resource',
    'create_parent_child_relationship',
    'create_collection_membership_relationship',
    'create_unique_key_value',
    'touch_unique_key_value',
]
