"""Wall-clock arithmetic for time entries.

Times of day are "HH:MM" 24-hour strings. Both ends of an entry are read on
the same nominal calendar date, so an entry never spans midnight.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import NOMINAL_DATE, TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_clock(value: str) -> time:
    """Parse "HH:MM" (or the "HH:MM:SS" form MySQL returns) into a time."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid time {value!r}: expected HH:MM")
    text = value.strip()
    if text.count(":") == 2:
        text = text.rsplit(":", 1)[0]
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r}: expected HH:MM")


def duration_minutes(start: str, end: str) -> int:
    """Whole minutes from start to end; zero or negative when end <= start."""
    day = datetime(*NOMINAL_DATE).date()
    delta = datetime.combine(day, parse_clock(end)) - datetime.combine(day, parse_clock(start))
    return int(delta.total_seconds() // 60)


def format_duration(minutes: int) -> str:
    if minutes < 0:
        raise ValueError(f"Cannot format a negative duration: {minutes}")
    return f"{minutes // 60}h {minutes % 60}m"


def format_clock(value: str) -> str:
    """"13:05" -> "1:05 PM"."""
    t = parse_clock(value)
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d} {suffix}"


def round_half_up(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
