from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..common.validators import normalize_tenant, subject_key


@dataclass(frozen=True)
class CounterKey:
    """(tenant, student) address of a current-week counter."""

    tenant: str
    subject: str

    @classmethod
    def of(cls, tenant: str, subject: str) -> "CounterKey":
        return cls(tenant=normalize_tenant(tenant) or "", subject=subject_key(subject))


@dataclass
class CounterEntry:
    count: int = 0
    annotations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WeekTally:
    """What a week close captured: the count and how many notes it summarized."""

    count: int
    summary: str
    annotation_count: int
