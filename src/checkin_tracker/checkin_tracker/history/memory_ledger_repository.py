from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

from ..common.validators import normalize_tenant
from ..core.exceptions import StoreError
from .model import LedgerRecord
from .repository import LedgerRepository, RawRow


class InMemoryLedgerRepository(LedgerRepository):
    """Process-local ledger for development and tests.

    `fail_reads` / `fail_appends` make the next calls raise StoreError, which
    is how tests simulate an unavailable backend.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self._rows: List[Dict[str, Any]] = list(rows or [])
        self._lock = threading.Lock()
        self.fail_reads = False
        self.fail_appends = False

    def read_records(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        if self.fail_reads:
            raise StoreError("Ledger store unavailable")
        with self._lock:
            rows = [dict(r) for r in self._rows]
        if tenant is None:
            return rows
        wanted = normalize_tenant(tenant)
        return [r for r in rows if normalize_tenant(r.get("owner")) == wanted]

    def append_record(self, record: LedgerRecord) -> None:
        if self.fail_appends:
            raise StoreError("Ledger store unavailable")
        with self._lock:
            self._rows.append(
                {
                    "owner": record.owner,
                    "student": record.subject,
                    "week_ending": record.week_ending,
                    "checkins": record.count,
                    "notes": record.annotation_summary,
                }
            )

    def add_raw(self, row: Dict[str, Any]) -> None:
        """Insert a row as-is (legacy or malformed shapes included)."""

        with self._lock:
            self._rows.append(dict(row))
