from __future__ import annotations

import threading
from typing import Dict, Tuple

from ..core.constants import ANNOTATION_SEPARATOR, DEFAULT_CHECKIN_CAP
from ..core.exceptions import ValidationError
from .model import CounterEntry, CounterKey, WeekTally


class CounterStore:
    """Volatile current-week counters, one entry per (tenant, student).

    Entries are created lazily and live as long as the store object. Nothing is
    persisted: durable totals only exist once a week is closed into the ledger.

    Mutations on the same key are serialized with a per-key lock; different
    keys never wait on each other.
    """

    def __init__(self, *, cap: int = DEFAULT_CHECKIN_CAP):
        cap = int(cap)
        if cap < 1:
            raise ValidationError("Check-in cap must be at least 1")
        self._cap = cap
        self._entries: Dict[CounterKey, CounterEntry] = {}
        self._locks: Dict[CounterKey, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    @property
    def cap(self) -> int:
        return self._cap

    def _lock_for(self, key: CounterKey) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
                self._entries[key] = CounterEntry()
            return lock

    def get(self, key: CounterKey) -> int:
        with self._lock_for(key):
            return self._entries[key].count

    def increment(self, key: CounterKey) -> int:
        # Saturates at the cap without signalling.
        with self._lock_for(key):
            entry = self._entries[key]
            entry.count = min(entry.count + 1, self._cap)
            return entry.count

    def append_annotation(self, key: CounterKey, text: str | None) -> None:
        note = (text or "").strip()
        if not note:
            return
        with self._lock_for(key):
            self._entries[key].annotations.append(note)

    def add(self, key: CounterKey, text: str | None = None) -> int:
        """Increment and record the note as one step."""

        note = (text or "").strip()
        with self._lock_for(key):
            entry = self._entries[key]
            entry.count = min(entry.count + 1, self._cap)
            if note:
                entry.annotations.append(note)
            return entry.count

    def reset(self, key: CounterKey) -> None:
        with self._lock_for(key):
            entry = self._entries[key]
            entry.count = 0
            entry.annotations.clear()

    def annotations(self, key: CounterKey) -> Tuple[str, ...]:
        with self._lock_for(key):
            return tuple(self._entries[key].annotations)

    def summarize_annotations(self, key: CounterKey) -> str:
        with self._lock_for(key):
            return self._summary(self._entries[key])

    def snapshot(self, key: CounterKey) -> Tuple[int, str]:
        """(count, annotation summary) read under one lock."""

        with self._lock_for(key):
            entry = self._entries[key]
            return entry.count, self._summary(entry)

    def tally(self, key: CounterKey) -> WeekTally:
        with self._lock_for(key):
            entry = self._entries[key]
            return WeekTally(
                count=entry.count,
                summary=self._summary(entry),
                annotation_count=len(entry.annotations),
            )

    def settle(self, key: CounterKey, tally: WeekTally) -> None:
        """Remove what `tally` captured, keeping anything added since.

        Used after a week close instead of `reset`, so a check-in arriving
        while the close is being saved carries over to the new week.
        """

        with self._lock_for(key):
            entry = self._entries[key]
            entry.count = max(entry.count - tally.count, 0)
            del entry.annotations[: tally.annotation_count]

    @staticmethod
    def _summary(entry: CounterEntry) -> str:
        parts = [a.strip() for a in entry.annotations]
        return ANNOTATION_SEPARATOR.join(p for p in parts if p)
