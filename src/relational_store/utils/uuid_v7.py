"""
UUID v7 generation and validation.

UUID v7 is a time-ordered UUID: the first 48 bits are a Unix timestamp in
milliseconds, followed by the version nibble (7), 12 bits of rand_a, the
variant bits (10) and 62 bits of rand_b.

    xxxxxxxx-xxxx-7xxx-[89ab]xxx-xxxxxxxxxxxx

Values generated later sort greater as strings. Within a single millisecond
the generator increments the random tail instead of drawing a fresh one, so
ids from one generator are strictly increasing.
"""
import logging
import os
import re
import threading
import uuid
import weakref
from typing import Any, Callable, Optional

from relational_store.utils.clock import Clock, SystemClock, epoch_milliseconds, system_clock

logger = logging.getLogger(__name__)

UUID_V7_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE,
)

_TAIL_BITS = 74  # 12 bits rand_a + 62 bits rand_b
_TAIL_MASK = (1 << _TAIL_BITS) - 1
_TIMESTAMP_MASK = (1 << 48) - 1


def is_valid_uuid_v7(value: Any) -> bool:
    """Validator for UUID v7 strings. Never raises."""
    if not isinstance(value, str) or not value.strip():
        return False
    return UUID_V7_PATTERN.fullmatch(value) is not None


class UuidV7Generator:
    """
    Thread-safe, monotonic UUID v7 generator.

    Args:
        clock: Source of the current time (defaults to the system clock)
        random_bytes: Callable returning n cryptographically random bytes
            (defaults to os.urandom)

    Usage:
        generator = UuidV7Generator()
        new_id = generator.generate()
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        random_bytes: Optional[Callable[[int], bytes]] = None
    ):
        self._clock = clock or system_clock
        self._random_bytes = random_bytes or os.urandom
        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._last_tail = 0

    def _random_tail(self) -> int:
        # Top bit left clear so the tail has room to increment within the millisecond
        return int.from_bytes(self._random_bytes(10), 'big') & (_TAIL_MASK >> 1)

    def generate(self) -> str:
        """Generate a new UUID v7 string."""
        with self._lock:
            timestamp = epoch_milliseconds(self._clock) & _TIMESTAMP_MASK

            if timestamp > self._last_timestamp:
                tail = self._random_tail()
            else:
                # Same millisecond or clock moved backwards: keep ordering
                timestamp = self._last_timestamp
                tail = self._last_tail + 1
                if tail > _TAIL_MASK:
                    logger.debug("UUID v7 tail exhausted, advancing embedded timestamp")
                    timestamp += 1
                    tail = self._random_tail()

            self._last_timestamp = timestamp
            self._last_tail = tail

        rand_a = tail >> 62
        rand_b = tail & ((1 << 62) - 1)
        value = (
            (timestamp << 80)
            | (0x7 << 76)
            | (rand_a << 64)
            | (0b10 << 62)
            | rand_b
        )
        return str(uuid.UUID(int=value))


_default_generator = UuidV7Generator()

# One generator per caller-supplied clock, dropped when the clock is collected
_clock_generators: 'weakref.WeakKeyDictionary[Any, UuidV7Generator]' = weakref.WeakKeyDictionary()
_clock_generators_lock = threading.Lock()


def generator_for_clock(clock: Optional[Clock] = None) -> UuidV7Generator:
    """
    Get the long-lived generator bound to a clock.

    Ids drawn through the same clock share one generator, so they stay strictly
    increasing within a millisecond. The system clock maps to the process-wide
    generator. Other clocks must be hashable and weak-referenceable.
    """
    if clock is None or isinstance(clock, SystemClock):
        return _default_generator
    with _clock_generators_lock:
        generator = _clock_generators.get(clock)
        if generator is None:
            # The generator holds a proxy so the clock can still be collected
            generator = UuidV7Generator(clock=weakref.proxy(clock))
            _clock_generators[clock] = generator
        return generator


def generate_uuid_v7(generator: Optional[UuidV7Generator] = None) -> str:
    """
    Generate a UUID v7 (time-ordered UUID).

    Args:
        generator: Generator to use. Defaults to the process-wide generator.

    Returns:
        A UUID v7 string such as '01955556-3cd2-7df2-b839-693fa6fbd505'
    """
    return (generator or _default_generator).generate()
