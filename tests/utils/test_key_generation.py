"""
Unit tests for DynamoDB key generation.
"""

import unittest

from relational_store.exceptions import EmptyFieldError, InvalidFormatError
from relational_store.utils.key_generation import (
    generate_account_index_key,
    generate_collection_member_key,
    generate_inverted_index_key,
    generate_parent_child_key,
    generate_resource_key,
    generate_unique_key_value_key,
)
from tests.fixtures.record_fixtures import (
    ACCOUNT_URN,
    CHILD_URN,
    COLLECTION_URN,
    MEMBER_URN,
    PARENT_URN,
    RESOURCE_URN,
)


class TestResourceKey(unittest.TestCase):
    """Tests for generate_resource_key."""

    def test_resource_key(self):
        key = generate_resource_key(RESOURCE_URN)
        self.assertEqual(key, {
            'PK': f'Resource#{RESOURCE_URN}',
            'SK': f'Resource#{RESOURCE_URN}',
        })

    def test_resource_key_is_deterministic(self):
        self.assertEqual(generate_resource_key(RESOURCE_URN), generate_resource_key(RESOURCE_URN))

    def test_invalid_urn(self):
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid URN format: "invalid"'):
            generate_resource_key('invalid')


class TestRelationshipKeys(unittest.TestCase):
    """Tests for parent/child and collection/member keys."""

    def test_parent_child_key(self):
        self.assertEqual(generate_parent_child_key(PARENT_URN, CHILD_URN), {
            'PK': f'Parent#{PARENT_URN}',
            'SK': f'Child#{CHILD_URN}',
        })

    def test_parent_checked_before_child(self):
        with self.assertRaises(InvalidFormatError) as ctx:
            generate_parent_child_key('invalid', 'also-invalid')
        self.assertIn('Invalid parent URN format', str(ctx.exception))
        self.assertEqual(ctx.exception.field, 'parentUrn')

    def test_invalid_child(self):
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid child URN format'):
            generate_parent_child_key(PARENT_URN, 'invalid')

    def test_collection_member_key(self):
        self.assertEqual(generate_collection_member_key(COLLECTION_URN, MEMBER_URN), {
            'PK': f'Collection#{COLLECTION_URN}',
            'SK': f'Member#{MEMBER_URN}',
        })

    def test_collection_checked_before_member(self):
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid collection URN format'):
            generate_collection_member_key('invalid', 'invalid')
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid member URN format'):
            generate_collection_member_key(COLLECTION_URN, 'invalid')


class TestUniqueKeyValueKey(unittest.TestCase):
    """Tests for generate_unique_key_value_key."""

    def test_unique_key_value_key(self):
        self.assertEqual(
            generate_unique_key_value_key('System.User', 'emailAddress', 'user@example.com'),
            {
                'PK': 'UniqueKeyValue#System.User#emailAddress#user@example.com',
                'SK': 'UniqueKeyValue#System.User#emailAddress',
            }
        )

    def test_fragments_are_trimmed(self):
        key = generate_unique_key_value_key(' System.User ', ' emailAddress ', ' user@example.com ')
        self.assertEqual(key['PK'], 'UniqueKeyValue#System.User#emailAddress#user@example.com')

    def test_fragments_are_not_urns(self):
        key = generate_unique_key_value_key('System.User', 'email.address', 'user+tag@example.com')
        self.assertEqual(key['SK'], 'UniqueKeyValue#System.User#email.address')

    def test_hash_in_value_is_not_escaped(self):
        key = generate_unique_key_value_key('System.User', 'handle', 'a#b')
        self.assertEqual(key['PK'], 'UniqueKeyValue#System.User#handle#a#b')

    def test_empty_fragments_in_order(self):
        with self.assertRaisesRegex(EmptyFieldError, 'ResourceType cannot be empty'):
            generate_unique_key_value_key('', '', '')
        with self.assertRaisesRegex(EmptyFieldError, 'Key cannot be empty'):
            generate_unique_key_value_key('System.User', '  ', '')
        with self.assertRaisesRegex(EmptyFieldError, 'Value cannot be empty'):
            generate_unique_key_value_key('System.User', 'emailAddress', '')


class TestIndexKeys(unittest.TestCase):
    """Tests for GSI1 and GSI2 key generation."""

    def test_inverted_index_key_from_item(self):
        item = {'PK': f'Parent#{PARENT_URN}', 'SK': f'Child#{CHILD_URN}'}
        self.assertEqual(generate_inverted_index_key(item), {
            'GSI1PK': f'Child#{CHILD_URN}',
            'GSI1SK': f'Parent#{PARENT_URN}',
        })

    def test_inverted_index_key_does_not_validate(self):
        self.assertEqual(
            generate_inverted_index_key({'PK': 'a', 'SK': 'b'}),
            {'GSI1PK': 'b', 'GSI1SK': 'a'}
        )

    def test_account_index_key(self):
        self.assertEqual(generate_account_index_key(ACCOUNT_URN, RESOURCE_URN), {
            'GSI2PK': ACCOUNT_URN,
            'GSI2SK': RESOURCE_URN,
        })

    def test_account_index_key_invalid(self):
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid account URN format'):
            generate_account_index_key('invalid', RESOURCE_URN)
        with self.assertRaisesRegex(InvalidFormatError, 'Invalid URN format'):
            generate_account_index_key(ACCOUNT_URN, 'invalid')


if __name__ == '__main__':
    unittest.main()
