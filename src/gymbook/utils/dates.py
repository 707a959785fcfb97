"""Date and time-of-day helpers.

Training logs are grouped by calendar day, so any timestamp entering the
store goes through :func:`as_day` first. Times within a day are stored as
minutes since midnight.
"""

from datetime import date, datetime, time

MINUTES_PER_DAY = 24 * 60


def as_day(value: date | datetime | str) -> date:
    """Normalize a date, datetime or ISO string to a calendar day."""
    if isinstance(value, str):
        return parse_day(value)
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_day(value: str) -> date:
    """Parse an ISO date (or datetime) string into a calendar day."""
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def minutes_of_day(value: datetime | time) -> int:
    """Minutes elapsed since midnight for ``value``."""
    return value.hour * 60 + value.minute


def parse_minutes(value: str) -> int:
    """Parse ``HH:MM`` into minutes since midnight."""
    hours_str, _, minutes_str = value.strip().partition(":")
    hours = int(hours_str)
    minutes = int(minutes_str or 0)
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time of day: {value}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
