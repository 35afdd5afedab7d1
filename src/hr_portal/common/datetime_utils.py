from __future__ import annotations

import re
from datetime import date, datetime

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_iso_date(value: str) -> bool:
    """Zero-padded YYYY-MM-DD only, so ISO strings compare in calendar order."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        return False
    try:
        parse_iso_date(value)
    except (TypeError, ValueError):
        return False
    return True


def normalize_iso_date(value) -> str:
    """Cut backend timestamps like '2024-01-01T00:00:00.000Z' to their date part."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def inclusive_days(start_date: str, end_date: str) -> int:
    """Calendar days from start to end, both ends counted."""
    return (parse_iso_date(end_date) - parse_iso_date(start_date)).days + 1


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
