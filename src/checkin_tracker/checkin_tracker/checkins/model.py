from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple

from ..core.enums import ProgressColor


@dataclass(frozen=True)
class WeekSnapshot:
    """What the dashboard shows for the week in progress."""

    subject: str
    count: int
    cap: int
    goal: int
    week_ending: date
    annotations: Tuple[str, ...] = ()

    @property
    def color(self) -> ProgressColor:
        return ProgressColor.for_count(self.count)

    def to_dict(self) -> dict:
        return {
            "student": self.subject,
            "count": self.count,
            "cap": self.cap,
            "goal": self.goal,
            "color": self.color.value,
            "week_ending": self.week_ending.strftime("%Y-%m-%d"),
            "annotations": list(self.annotations),
        }
