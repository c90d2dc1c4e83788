"""
Unit tests for DynamoDB attribute-value conversion.
"""

import unittest
from decimal import Decimal

from relational_store.factories import create_resource
from relational_store.models.records import ResourceRecord
from relational_store.utils.serde_utils import from_attribute_values, to_attribute_values
from tests.fixtures.record_fixtures import ACCOUNT_URN, fixed_clock


class TestAttributeValues(unittest.TestCase):
    """Tests for to_attribute_values / from_attribute_values."""

    def test_serializes_scalar_types(self):
        result = to_attribute_values({
            'PK': 'Resource#x',
            '_schemaVersion': 1,
            'score': 1.5,
            'active': True,
            'tags': ['a', 'b'],
            'nothing': None,
        })
        self.assertEqual(result['PK'], {'S': 'Resource#x'})
        self.assertEqual(result['_schemaVersion'], {'N': '1'})
        self.assertEqual(result['score'], {'N': '1.5'})
        self.assertEqual(result['active'], {'BOOL': True})
        self.assertEqual(result['tags'], {'L': [{'S': 'a'}, {'S': 'b'}]})
        self.assertEqual(result['nothing'], {'NULL': True})

    def test_deserializes_numbers(self):
        item = from_attribute_values({
            '_schemaVersion': {'N': '2'},
            'score': {'N': '1.5'},
            'name': {'S': 'My Account'},
        })
        self.assertEqual(item['_schemaVersion'], 2)
        self.assertIsInstance(item['_schemaVersion'], int)
        self.assertEqual(item['score'], Decimal('1.5'))
        self.assertEqual(item['name'], 'My Account')

    def test_float_with_zero_fraction_is_not_narrowed(self):
        item = from_attribute_values(to_attribute_values({'ratio': 2.0, 'count': 2, 'nested': {'ratio': 3.0}}))
        self.assertEqual(item['ratio'], Decimal('2.0'))
        self.assertIsInstance(item['ratio'], Decimal)
        self.assertIsInstance(item['count'], int)
        self.assertIsInstance(item['nested']['ratio'], Decimal)

    def test_record_survives_attribute_value_form(self):
        record = create_resource(
            'System.Account',
            3,
            account_urn=ACCOUNT_URN,
            attributes={'name': 'My Account', 'limits': {'daily': 100}},
            clock=fixed_clock(),
        )
        wire = to_attribute_values(record.to_dynamodb_item(include_indexes=True))
        self.assertEqual(wire['GSI2PK'], {'S': ACCOUNT_URN})

        restored = ResourceRecord.from_dynamodb_item(from_attribute_values(wire))
        self.assertEqual(restored.to_dynamodb_item(), record.to_dynamodb_item())
        self.assertEqual(restored.attributes, {'name': 'My Account', 'limits': {'daily': 100}})


if __name__ == '__main__':
    unittest.main()
