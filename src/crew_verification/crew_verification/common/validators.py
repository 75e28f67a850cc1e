from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_clock(value: str, field_name: str) -> str:
    """Accept a 24-hour HH:MM string."""
    v = str(value or "").strip()
    if not _CLOCK_RE.match(v):
        raise ValidationError(f"{field_name} must be a 24-hour time (HH:MM)")
    return v


def require_non_negative_int(value, field_name: str) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number
