"""Calendar helpers: timestamp parsing and day-boundary normalization."""
from datetime import date, datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60


def parse_timestamp(value) -> datetime:
    """Return a timezone-aware datetime. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_day(value) -> date:
    """Strip the time of day. Uses the wall-clock date as recorded, no zone conversion."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def date_str(value) -> str:
    return to_day(value).isoformat()


def days_between(earlier, later) -> float:
    """Fractional days from ``earlier`` to ``later`` (negative if reversed)."""
    delta = parse_timestamp(later) - parse_timestamp(earlier)
    return delta.total_seconds() / SECONDS_PER_DAY


def same_weekday(a, b) -> bool:
    return to_day(a).weekday() == to_day(b).weekday()


def same_day_of_month(a, b) -> bool:
    return to_day(a).day == to_day(b).day


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """The current instant as an aware datetime in the machine's local zone."""
    return datetime.now().astimezone()
