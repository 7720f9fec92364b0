"""UTC timestamp helpers shared by validators, repositories and reporting."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    """Return current UTC timestamp."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Normalize naive/aware datetimes to timezone-aware UTC.

    Naive values are assumed to already be UTC; SQLite round-trips drop tzinfo.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse one ISO-8601 date-time string that carries an explicit offset."""
    candidate = value.strip()
    if "T" not in candidate and " " not in candidate:
        raise ValueError("must be an ISO-8601 date-time")
    if candidate.endswith(("z", "Z")):
        candidate = f"{candidate[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        raise ValueError("must be an ISO-8601 date-time") from None
    if parsed.tzinfo is None:
        raise ValueError("must include a timezone designator")
    return parsed.astimezone(UTC)


def parse_range_boundary(value: str, *, end_of_day: bool) -> datetime:
    """Parse one inclusive range boundary given as a date or a date-time.

    Date-only values expand to the first (or last, with ``end_of_day``)
    microsecond of that UTC day.
    """
    candidate = value.strip()
    try:
        day = date.fromisoformat(candidate)
    except ValueError:
        return parse_timestamp(candidate)
    boundary = datetime.combine(day, time.min, tzinfo=UTC)
    if end_of_day:
        return boundary + timedelta(days=1) - timedelta(microseconds=1)
    return boundary


def format_timestamp(value: datetime | None) -> str | None:
    """Render one timestamp as ISO-8601 UTC with millisecond precision and ``Z``."""
    if value is None:
        return None
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
