"""
ISO-8601 timestamp utilities.

Generated timestamps are always UTC with millisecond precision and a 'Z'
suffix, e.g. '2024-01-15T10:30:45.123Z'. Validation also accepts values
without milliseconds and with a numeric UTC offset.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional

from relational_store.utils.clock import Clock, system_clock

ISO_8601_PATTERN = re.compile(
    r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?(Z|[+-]\d{2}:\d{2})'
)


def format_timestamp(dt: datetime) -> str:
    """
    Render a datetime in the canonical form YYYY-MM-DDTHH:mm:ss.sssZ.

    Naive datetimes are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f"{dt.microsecond // 1000:03d}Z"


def get_current_timestamp(clock: Optional[Clock] = None) -> str:
    """
    Get the current time as an ISO-8601 string.

    Args:
        clock: Clock to read. Defaults to the system clock.

    Returns:
        Timestamp such as '2024-01-15T10:30:45.123Z'
    """
    return format_timestamp((clock or system_clock).now())


def is_valid_iso8601(timestamp: Any) -> bool:
    """
    Validate that a string is an ISO-8601 timestamp naming a real date and time.

    Accepted forms:
    - '2024-01-15T10:30:45.123Z'
    - '2024-01-15T10:30:45Z'
    - '2024-01-15T10:30:45+05:00'

    Never raises.
    """
    if not isinstance(timestamp, str) or not timestamp.strip():
        return False

    value = timestamp.strip()
    if not ISO_8601_PATTERN.fullmatch(value):
        return False

    if value.endswith('Z'):
        value = value[:-1] + '+00:00'

    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True
