from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class LedgerRecord:
    """One appended weekly total. Never updated once written."""

    owner: str
    subject: str
    week_ending: date
    count: int
    annotation_summary: str = ""


@dataclass(frozen=True)
class WeeklyTotal:
    """Read-model: the reconciled total for one week."""

    week_ending: date
    count: int
    annotation_summary: str = ""

    def to_dict(self) -> dict:
        return {
            "week_ending": self.week_ending.strftime("%Y-%m-%d"),
            "count": self.count,
            "annotation_summary": self.annotation_summary,
        }


@dataclass(frozen=True)
class WeekClose:
    """Result of closing a week."""

    week_ending: date
    count: int
