from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Optional

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _ISO_DATE_RE.match(text):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_iso_date(value)


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def now_local() -> datetime:
    return datetime.now()
