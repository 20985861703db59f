"""Calendar day helpers."""

from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


def day_key(instant: datetime, tz: tzinfo) -> str:
    """Return the ISO calendar date of an instant in the given timezone."""
    return instant.astimezone(tz).date().isoformat()


def parse_day_key(key: str) -> date | None:
    """Parse an ISO day key, returning None when it is malformed."""
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None
