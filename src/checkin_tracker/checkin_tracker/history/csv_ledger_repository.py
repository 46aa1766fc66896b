from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date
from ..common.validators import normalize_tenant
from ..database.csv_base import append_row, read_rows
from .model import LedgerRecord
from .repository import LedgerRepository, RawRow

HISTORY_COLUMNS = ("owner", "student", "week_ending", "checkins", "notes")


class CSVLedgerRepository(LedgerRepository):
    """Ledger kept in a spreadsheet-style CSV file (`history.csv`)."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def read_records(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        rows = read_rows(self._path)
        if tenant is None:
            return rows
        wanted = normalize_tenant(tenant)
        return [r for r in rows if normalize_tenant(r.get("owner")) == wanted]

    def append_record(self, record: LedgerRecord) -> None:
        append_row(
            self._path,
            HISTORY_COLUMNS,
            {
                "owner": record.owner,
                "student": record.subject,
                "week_ending": format_iso_date(record.week_ending),
                "checkins": int(record.count),
                "notes": record.annotation_summary,
            },
        )
