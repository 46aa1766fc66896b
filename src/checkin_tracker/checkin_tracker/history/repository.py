from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import LedgerRecord

RawRow = Mapping[str, Any]


class LedgerRepository(Protocol):
    """Append-only store of weekly totals.

    Rows come back raw (`owner`, `student`, `week_ending`, `checkins`, `notes`)
    and may be malformed; parsing and reconciliation happen in the service.
    Backend failures are raised as StoreError.
    """

    def read_records(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        raise NotImplementedError

    def append_record(self, record: LedgerRecord) -> None:
        raise NotImplementedError
