from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import clean_subject, normalize_tenant
from ..history.repository import RawRow


@dataclass(frozen=True)
class RosterEntry:
    """A student known to an owner. `owner=None` marks a legacy, ownerless row."""

    owner: Optional[str]
    subject: str

    @property
    def is_legacy(self) -> bool:
        return self.owner is None

    @classmethod
    def from_row(cls, row: RawRow) -> Optional["RosterEntry"]:
        subject = clean_subject(row.get("student"))
        if subject is None:
            return None
        return cls(owner=normalize_tenant(row.get("owner")), subject=subject)
