from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a stored week value into a date.

    Stores hand back dates (MySQL), datetimes, or strings (CSV / spreadsheets).
    Anything blank or unparseable gives None.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            # Spreadsheet exports sometimes carry a time part: "2024-03-15T00:00:00".
            return parse_iso_date(text[:10])
        except ValueError:
            return None
    return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
