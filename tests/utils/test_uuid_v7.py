"""
Unit tests for UUID v7 generation and validation.
"""

import gc
import threading
import time
import unittest
import uuid
import weakref

from relational_store.utils.clock import FixedClock, SystemClock, system_clock
from relational_store.utils.uuid_v7 import (
    UUID_V7_PATTERN,
    UuidV7Generator,
    generate_uuid_v7,
    generator_for_clock,
    is_valid_uuid_v7,
)
from tests.fixtures.record_fixtures import FIXED_EPOCH_MS, FIXED_INSTANT


def zero_bytes(n: int) -> bytes:
    return b'\x00' * n


class TestIsValidUuidV7(unittest.TestCase):
    """Tests for is_valid_uuid_v7."""

    def test_valid_values(self):
        self.assertTrue(is_valid_uuid_v7('01955556-3cd2-7df2-b839-693fa6fbd505'))
        self.assertTrue(is_valid_uuid_v7('01955556-3CD2-7DF2-B839-693FA6FBD505'))

    def test_invalid_values(self):
        for value in [
            '',
            '   ',
            'invalid-uuid',
            '01955556-3cd2-4df2-b839-693fa6fbd505',  # version 4
            '01955556-3cd2-7df2-c839-693fa6fbd505',  # wrong variant
            '01955556-3cd2-7df2-b839-693fa6fbd50',   # short
            '01955556-3cd2-7df2-b839-693fa6fbd505\n',
            None,
            123,
        ]:
            with self.subTest(value=value):
                self.assertFalse(is_valid_uuid_v7(value))


class TestUuidV7Generator(unittest.TestCase):
    """Tests for UuidV7Generator."""

    def test_generated_value_format(self):
        value = generate_uuid_v7()
        self.assertTrue(UUID_V7_PATTERN.fullmatch(value))
        self.assertEqual(value, value.lower())
        parsed = uuid.UUID(value)
        self.assertEqual(parsed.version, 7)
        self.assertEqual(parsed.variant, uuid.RFC_4122)

    def test_timestamp_embedded_in_high_bits(self):
        generator = UuidV7Generator(clock=FixedClock(FIXED_INSTANT))
        value = generator.generate()
        self.assertEqual(value.replace('-', '')[:12], f'{FIXED_EPOCH_MS:012x}')

    def test_same_millisecond_is_strictly_increasing(self):
        generator = UuidV7Generator(clock=FixedClock(FIXED_INSTANT), random_bytes=zero_bytes)
        first = generator.generate()
        second = generator.generate()
        self.assertEqual(first, f'{FIXED_EPOCH_MS:012x}'[:8] + '-' + f'{FIXED_EPOCH_MS:012x}'[8:] + '-7000-8000-000000000000')
        self.assertEqual(second[-12:], '000000000001')
        self.assertGreater(second, first)

    def test_later_millisecond_sorts_greater(self):
        clock = FixedClock(FIXED_INSTANT)
        generator = UuidV7Generator(clock=clock, random_bytes=lambda n: b'\xff' * n)
        first = generator.generate()
        clock.advance(milliseconds=1)
        second = UuidV7Generator(clock=clock, random_bytes=zero_bytes).generate()
        self.assertGreater(second.lower(), first.lower())

    def test_clock_moving_backwards_keeps_order(self):
        clock = FixedClock(FIXED_INSTANT)
        generator = UuidV7Generator(clock=clock)
        first = generator.generate()
        clock.advance(milliseconds=-5)
        second = generator.generate()
        self.assertGreater(second, first)
        self.assertEqual(second.replace('-', '')[:12], f'{FIXED_EPOCH_MS:012x}')

    def test_tail_overflow_advances_timestamp(self):
        generator = UuidV7Generator(clock=FixedClock(FIXED_INSTANT), random_bytes=zero_bytes)
        first = generator.generate()
        generator._last_tail = (1 << 74) - 1
        second = generator.generate()
        self.assertEqual(second.replace('-', '')[:12], f'{FIXED_EPOCH_MS + 1:012x}')
        self.assertGreater(second, first)

    def test_tight_loop_produces_distinct_values(self):
        values = [generate_uuid_v7() for _ in range(100)]
        self.assertEqual(len(set(values)), 100)
        self.assertEqual(values, sorted(values))

    def test_batches_are_non_decreasing(self):
        values = []
        for _ in range(3):
            values.extend(generate_uuid_v7() for _ in range(10))
            time.sleep(0.002)
        lowered = [v.lower() for v in values]
        self.assertEqual(lowered, sorted(lowered))

    def test_concurrent_generation_is_unique(self):
        generator = UuidV7Generator()
        results = []
        lock = threading.Lock()

        def worker():
            local = [generator.generate() for _ in range(200)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 800)
        self.assertEqual(len(set(results)), 800)


class TestGeneratorForClock(unittest.TestCase):
    """Tests for generator_for_clock."""

    def test_same_clock_shares_generator(self):
        clock = FixedClock(FIXED_INSTANT)
        self.assertIs(generator_for_clock(clock), generator_for_clock(clock))
        self.assertIsNot(generator_for_clock(clock), generator_for_clock(FixedClock(FIXED_INSTANT)))

    def test_system_clock_uses_process_generator(self):
        self.assertIs(generator_for_clock(None), generator_for_clock(system_clock))
        self.assertIs(generator_for_clock(SystemClock()), generator_for_clock(system_clock))

    def test_ids_through_shared_clock_are_strictly_increasing(self):
        clock = FixedClock(FIXED_INSTANT)
        values = [generator_for_clock(clock).generate() for _ in range(50)]
        self.assertEqual(values, sorted(values))
        self.assertEqual(len(set(values)), 50)
        for value in values:
            self.assertEqual(value.replace('-', '')[:12], f'{FIXED_EPOCH_MS:012x}')

    def test_generator_follows_clock_advance(self):
        clock = FixedClock(FIXED_INSTANT)
        generator_for_clock(clock).generate()
        clock.advance(milliseconds=5)
        value = generator_for_clock(clock).generate()
        self.assertEqual(value.replace('-', '')[:12], f'{FIXED_EPOCH_MS + 5:012x}')

    def test_entry_released_with_clock(self):
        clock = FixedClock(FIXED_INSTANT)
        generator_for_clock(clock)
        clock_ref = weakref.ref(clock)
        del clock
        gc.collect()
        self.assertIsNone(clock_ref())


if __name__ == '__main__':
    unittest.main()
