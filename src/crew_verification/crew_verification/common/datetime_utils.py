from __future__ import annotations

from datetime import datetime

from ..core.constants import CLOCK_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp coming from the host UI into naive local time.

    Time clock rows are stored as naive local datetimes, so an aware value
    (including the trailing 'Z' of JavaScript's toISOString) is converted to
    local time before its offset is dropped.
    """
    text = (value or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.replace(tzinfo=None)


def format_clock(value: datetime) -> str:
    return value.strftime(CLOCK_FORMAT)


def now_local() -> datetime:
    """Current local time. Injected into the aggregator so tests can pin it."""
    return datetime.now()
