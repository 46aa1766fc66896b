from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.results import ReadResult
from ..common.validators import clean_subject, normalize_tenant
from ..core.constants import DEFAULT_WEEKLY_GOAL
from ..core.enums import FailurePolicy
from ..counters.model import CounterKey
from ..counters.store import CounterStore
from ..history.model import WeekClose, WeeklyTotal
from ..history.service import HistoryService
from ..roster.service import RosterService
from ..weeks.clock import week_ending_date
from .model import WeekSnapshot
from .policies import run_step

logger = logging.getLogger(__name__)


class CheckinService:
    """Use case: weekly check-ins per (owner, student).

    Blank owners or student names are ignored: mutations do nothing and
    reads come back empty.
    """

    def __init__(
        self,
        counters: CounterStore,
        history: HistoryService,
        roster: RosterService,
        *,
        weekly_goal: int = DEFAULT_WEEKLY_GOAL,
    ):
        self._counters = counters
        self._history = history
        self._roster = roster
        self._weekly_goal = int(weekly_goal)

    @staticmethod
    def _key(tenant: str, subject: str) -> Optional[CounterKey]:
        if normalize_tenant(tenant) is None or clean_subject(subject) is None:
            return None
        return CounterKey.of(tenant, subject)

    def current_count(self, tenant: str, subject: str) -> int:
        key = self._key(tenant, subject)
        if key is None:
            return 0
        return self._counters.get(key)

    def add_check_in(self, tenant: str, subject: str, annotation: Optional[str] = None) -> int:
        key = self._key(tenant, subject)
        if key is None:
            return 0
        return self._counters.add(key, annotation)

    def clear_week(self, tenant: str, subject: str) -> None:
        key = self._key(tenant, subject)
        if key is None:
            return
        self._counters.reset(key)

    def end_week(self, tenant: str, subject: str, now: Optional[datetime] = None) -> Optional[WeekClose]:
        """Close the week: store the count in the ledger, then take it off the counter.

        Roster registration is best effort. The ledger append is all or
        nothing: if it fails the StoreError propagates and the counter keeps
        its value, so the call can simply be retried.
        """

        key = self._key(tenant, subject)
        if key is None:
            return None
        tenant_key = normalize_tenant(tenant)
        name = clean_subject(subject)

        run_step(
            FailurePolicy.BEST_EFFORT,
            f"Roster registration for {tenant_key}/{name}",
            lambda: self._roster.ensure_registered(tenant_key, name),
        )

        tally = self._counters.tally(key)
        week_ending = week_ending_date(now or now_local())

        run_step(
            FailurePolicy.ALL_OR_NOTHING,
            f"Ledger append for {tenant_key}/{name}",
            lambda: self._history.append(
                tenant=tenant_key,
                subject=name,
                week_ending=week_ending,
                count=tally.count,
                annotation_summary=tally.summary,
            ),
        )

        # Only what was saved is taken off; check-ins made meanwhile stay.
        self._counters.settle(key, tally)
        return WeekClose(week_ending=week_ending, count=tally.count)

    def list_subjects(self, tenant: str) -> ReadResult[str]:
        return self._roster.list_subjects(tenant)

    def weekly_history(self, tenant: str, subject: str) -> ReadResult[WeeklyTotal]:
        return self._history.read_reconciled(tenant, subject)

    def register_subject(self, tenant: str, subject: str) -> None:
        tenant_key = normalize_tenant(tenant)
        name = clean_subject(subject)
        if tenant_key is None or name is None:
            return
        run_step(
            FailurePolicy.BEST_EFFORT,
            f"Roster registration for {tenant_key}/{name}",
            lambda: self._roster.ensure_registered(tenant_key, name),
        )

    def week_snapshot(self, tenant: str, subject: str, now: Optional[datetime] = None) -> WeekSnapshot:
        key = self._key(tenant, subject)
        name = clean_subject(subject) or ""
        week_ending = week_ending_date(now or now_local())
        if key is None:
            return WeekSnapshot(
                subject=name, count=0, cap=self._counters.cap, goal=self._weekly_goal, week_ending=week_ending
            )
        return WeekSnapshot(
            subject=name,
            count=self._counters.get(key),
            cap=self._counters.cap,
            goal=self._weekly_goal,
            week_ending=week_ending,
            annotations=self._counters.annotations(key),
        )
