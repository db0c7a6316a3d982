"""
Datetime utilities.
"""

from datetime import date, datetime, time, timezone


def utcnow() -> datetime:
    """
    Get current UTC time (timezone-aware).
    """
    return datetime.now(timezone.utc)


def utcnow_naive() -> datetime:
    """Current UTC time without tzinfo, as stored in DateTime columns."""
    return utcnow().replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date_bound(value: str | None, *, end_of_day: bool = False) -> datetime | None:
    """
    Parse a report bound given as ``YYYY-MM-DD`` or an ISO-8601 timestamp.

    Date-only values expand to the start of the day, or to its last instant when
    ``end_of_day`` is set, so an end bound covers the whole day.

    Raises:
        ValueError: If the value is not a recognizable date
    """
    if not value:
        return None
    value = value.strip()
    if len(value) == 10:
        day = date.fromisoformat(value)
        return datetime.combine(day, time.max if end_of_day else time.min)
    return to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
