from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    """Parse an optional YYYY-MM-DD request value; blank means "not given"."""
    if value is None or not str(value).strip():
        return None
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def format_long_date(value: date) -> str:
    """'Wednesday, January 10, 2024' as printed in report emails."""
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def mail_timestamp() -> datetime:
    """Moment stamped into the 'generated on' line of report emails."""
    return datetime.now()
