from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

from ..common.validators import normalize_tenant
from ..core.exceptions import StoreError
from ..history.repository import RawRow
from .repository import RosterRepository


class InMemoryRosterRepository(RosterRepository):
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self._rows: List[Dict[str, Any]] = list(rows or [])
        self._lock = threading.Lock()
        self.fail_reads = False
        self.fail_appends = False

    def read_roster(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        if self.fail_reads:
            raise StoreError("Roster store unavailable")
        with self._lock:
            rows = [dict(r) for r in self._rows]
        if tenant is None:
            return rows
        wanted = normalize_tenant(tenant)
        return [r for r in rows if normalize_tenant(r.get("owner")) in (wanted, None)]

    def append_roster_entry(self, tenant: str, subject: str) -> None:
        if self.fail_appends:
            raise StoreError("Roster store unavailable")
        with self._lock:
            self._rows.append({"owner": tenant, "student": subject})
