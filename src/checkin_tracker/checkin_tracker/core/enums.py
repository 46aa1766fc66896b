from __future__ import annotations

from enum import Enum


class ProgressColor(str, Enum):
    """Badge color shown next to a weekly count."""

    GREEN = "green"
    GOLDENROD = "goldenrod"
    ORANGE = "orange"
    CRIMSON = "crimson"
    BLACK = "black"

    @classmethod
    def for_count(cls, count: int) -> "ProgressColor":
        if count >= 4:
            return cls.GREEN
        return {
            3: cls.GOLDENROD,
            2: cls.ORANGE,
            1: cls.CRIMSON,
        }.get(count, cls.BLACK)


class FailurePolicy(str, Enum):
    """How a sub-step of an operation reacts to a store failure."""

    BEST_EFFORT = "best_effort"
    ALL_OR_NOTHING = "all_or_nothing"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    CSV = "csv"
    MEMORY = "memory"
