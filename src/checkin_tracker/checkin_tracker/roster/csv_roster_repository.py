from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..common.validators import normalize_tenant
from ..database.csv_base import append_row, read_rows
from ..history.repository import RawRow
from .repository import RosterRepository

ROSTER_COLUMNS = ("owner", "student")


class CSVRosterRepository(RosterRepository):
    """Roster kept in `roster.csv`.

    Sheets from the single-owner version only have a `student` column; those
    rows come back without an owner and are treated as legacy rows.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def read_roster(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        rows = read_rows(self._path)
        if tenant is None:
            return rows
        wanted = normalize_tenant(tenant)
        return [r for r in rows if normalize_tenant(r.get("owner")) in (wanted, None)]

    def append_roster_entry(self, tenant: str, subject: str) -> None:
        append_row(self._path, ROSTER_COLUMNS, {"owner": tenant, "student": subject})
