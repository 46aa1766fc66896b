from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..history.repository import RawRow


class RosterRepository(Protocol):
    """Append-only list of (owner, student) rows.

    `read_roster(tenant)` returns the tenant's rows plus legacy rows without an
    owner; `read_roster()` returns everything. Backend failures raise StoreError.
    """

    def read_roster(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        raise NotImplementedError

    def append_roster_entry(self, tenant: str, subject: str) -> None:
        raise NotImplementedError
