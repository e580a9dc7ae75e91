"""Date helpers: ISO timestamps in storage form and display formatting."""
from datetime import date, datetime, time, timezone
from typing import Optional, Union

DateInput = Union[str, date, datetime, None]


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC string with millisecond precision.

    Example: 2025-06-01T00:00:00.000Z
    """
    value = as_utc(value)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{value.microsecond // 1000:03d}Z"
    )


def now_iso() -> str:
    """Current time in storage form."""
    return to_iso(datetime.now(timezone.utc))


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime string into an aware UTC datetime. Returns None if invalid."""
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        if len(text) == 10:
            # Date-only input is midnight UTC
            return datetime.combine(date.fromisoformat(text), time(), tzinfo=timezone.utc)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return as_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        # Offsets near year 1 or 9999 can push the UTC value out of range
        return None


def parse_date_input(value: DateInput) -> Optional[str]:
    """
    Normalize a user-supplied target date to storage form.

    Accepts date-only strings, ISO datetime strings, and date/datetime objects.
    Returns None when the value is missing or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        try:
            return to_iso(value)
        except OverflowError:
            return None
    if isinstance(value, date):
        return to_iso(datetime.combine(value, time(), tzinfo=timezone.utc))

    parsed = parse_iso(value)
    return to_iso(parsed) if parsed else None


def format_local_date(value: Optional[str]) -> str:
    """Format a stored ISO date for display in the local timezone and locale."""
    if not value:
        return "N/A"

    parsed = parse_iso(value)
    if parsed is None:
        return "Invalid Date"
    try:
        return parsed.astimezone().strftime("%x")
    except OverflowError:
        return "Invalid Date"
