"""
Clock-time helpers for assignment call/end times.
Times are wall-clock values without a date component ("HH:MM" or "HH:MM:SS").
"""
from datetime import datetime, time


def parse_clock(value):
    """
    Normalize a clock time.

    Args:
        value: datetime.time, datetime, "HH:MM[:SS]" string, '' or None

    Returns:
        datetime.time or None for empty values

    Raises:
        ValueError: If the string is not a valid clock time
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f'Invalid clock time: {value!r}')

    parts = value.strip().split(':')
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f'Invalid clock time: {value!r}')
    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    return time(hour, minute, second)


def format_clock(value):
    """Format a clock time as HH:MM (None stays None)."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return value.strftime('%H:%M')
