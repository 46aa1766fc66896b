from __future__ import annotations

from datetime import datetime

import pytest

from src.checkin_tracker.checkin_tracker.checkins.service import CheckinService
from src.checkin_tracker.checkin_tracker.counters.store import CounterStore
from src.checkin_tracker.checkin_tracker.history.memory_ledger_repository import InMemoryLedgerRepository
from src.checkin_tracker.checkin_tracker.history.service import HistoryService
from src.checkin_tracker.checkin_tracker.roster.memory_roster_repository import InMemoryRosterRepository
from src.checkin_tracker.checkin_tracker.roster.service import RosterService


@pytest.fixture
def fixed_now() -> datetime:
    # Thursday
    return datetime(2024, 3, 14, 10, 30)


@pytest.fixture
def ledger() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def roster() -> InMemoryRosterRepository:
    return InMemoryRosterRepository()


@pytest.fixture
def service(ledger, roster) -> CheckinService:
    history = HistoryService(ledger)
    return CheckinService(CounterStore(cap=4), history, RosterService(roster, history))
