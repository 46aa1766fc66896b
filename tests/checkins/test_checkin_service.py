from __future__ import annotations

from datetime import date, datetime

import pytest

from src.checkin_tracker.checkin_tracker.checkins.service import CheckinService
from src.checkin_tracker.checkin_tracker.core.enums import ProgressColor
from src.checkin_tracker.checkin_tracker.core.exceptions import StoreError
from src.checkin_tracker.checkin_tracker.counters.store import CounterStore
from src.checkin_tracker.checkin_tracker.history.memory_ledger_repository import InMemoryLedgerRepository
from src.checkin_tracker.checkin_tracker.history.service import HistoryService
from src.checkin_tracker.checkin_tracker.roster.service import RosterService


@pytest.mark.parametrize("start", [0, 1, 2, 3])
def test_add_checkin_increments_by_one_below_cap(service, start):
    for _ in range(start):
        service.add_check_in("alice", "Sam")

    assert service.add_check_in("alice", "Sam") == start + 1


def test_add_checkin_at_cap_stays_at_cap(service):
    for _ in range(4):
        service.add_check_in("alice", "Sam")

    assert service.add_check_in("alice", "Sam") == 4
    assert service.current_count("alice", "Sam") == 4


def test_clear_week_always_zeroes(service):
    service.add_check_in("alice", "Sam", "note")
    service.add_check_in("alice", "Sam")

    service.clear_week("alice", "Sam")

    assert service.current_count("alice", "Sam") == 0
    assert service.week_snapshot("alice", "Sam").annotations == ()


def test_blank_subject_is_a_noop(service, roster, ledger, fixed_now):
    assert service.add_check_in("alice", "   ") == 0
    assert service.current_count("alice", "") == 0
    assert service.end_week("alice", " ", now=fixed_now) is None
    service.register_subject("alice", "")

    assert ledger.read_records() == []
    assert roster.read_roster() == []


def test_end_to_end_week(service, ledger, fixed_now):
    for note in ("phonics", "", "reading", "math"):
        service.add_check_in("alice", "Sam", note)
    assert service.current_count("alice", "Sam") == 4

    closed = service.end_week("alice", "Sam", now=fixed_now)

    assert closed.week_ending == date(2024, 3, 15)
    assert closed.count == 4
    assert service.current_count("alice", "Sam") == 0

    history = service.weekly_history("alice", "Sam")
    assert [(t.week_ending, t.count, t.annotation_summary) for t in history] == [
        (date(2024, 3, 15), 4, "phonics; reading; math")
    ]
    assert "Sam" in service.list_subjects("alice").items


def test_end_week_failure_preserves_count(service, ledger, fixed_now):
    service.add_check_in("alice", "Sam", "kept")
    service.add_check_in("alice", "Sam")
    ledger.fail_appends = True

    with pytest.raises(StoreError):
        service.end_week("alice", "Sam", now=fixed_now)

    assert service.current_count("alice", "Sam") == 2
    assert service.week_snapshot("alice", "Sam").annotations == ("kept",)

    ledger.fail_appends = False
    closed = service.end_week("alice", "Sam", now=fixed_now)
    assert closed.count == 2
    assert service.current_count("alice", "Sam") == 0


def test_end_week_survives_roster_failure(service, roster, fixed_now):
    roster.fail_reads = True
    roster.fail_appends = True
    service.add_check_in("alice", "Sam")

    closed = service.end_week("alice", "Sam", now=fixed_now)

    assert closed.count == 1
    assert service.current_count("alice", "Sam") == 0
    assert [t.count for t in service.weekly_history("alice", "Sam")] == [1]


def test_end_week_registers_student_once(service, roster, fixed_now):
    service.end_week("Alice", "Sam", now=fixed_now)
    service.end_week("alice", "sam", now=fixed_now)

    assert roster.read_roster() == [{"owner": "alice", "student": "Sam"}]


def test_double_end_week_reconciles_to_max(service, ledger, fixed_now):
    for _ in range(3):
        service.add_check_in("alice", "Sam")
    service.end_week("alice", "Sam", now=fixed_now)
    # Retried close after the reset: a second, lower row for the same Friday.
    service.end_week("alice", "Sam", now=fixed_now)

    assert len(ledger.read_records()) == 2
    assert [t.count for t in service.weekly_history("alice", "Sam")] == [3]


def test_tenants_are_isolated(service, fixed_now):
    service.add_check_in("alice", "Sam")
    service.add_check_in("bob", "Sam")
    service.add_check_in("bob", "Sam")

    service.end_week("bob", "Sam", now=fixed_now)

    assert service.current_count("alice", "Sam") == 1
    assert service.weekly_history("alice", "Sam").items == ()
    assert service.list_subjects("alice").items == ("Student 1",)


def test_saturday_close_files_under_previous_friday(service):
    service.add_check_in("alice", "Sam")

    closed = service.end_week("alice", "Sam", now=datetime(2024, 3, 16, 9, 0))

    assert closed.week_ending == date(2024, 3, 15)


def test_history_read_failure_is_degraded_not_raised(service, ledger):
    ledger.fail_reads = True

    result = service.weekly_history("alice", "Sam")

    assert result.items == ()
    assert result.degraded


def test_week_snapshot(service, fixed_now):
    service.add_check_in("alice", "Sam", "one")
    service.add_check_in("alice", "Sam", "two")
    service.add_check_in("alice", "Sam")

    snap = service.week_snapshot("alice", "Sam", now=fixed_now)

    assert snap.to_dict() == {
        "student": "Sam",
        "count": 3,
        "cap": 4,
        "goal": 4,
        "color": "goldenrod",
        "week_ending": "2024-03-15",
        "annotations": ["one", "two"],
    }


@pytest.mark.parametrize(
    "count, color",
    [(0, ProgressColor.BLACK), (1, ProgressColor.CRIMSON), (2, ProgressColor.ORANGE), (3, ProgressColor.GOLDENROD), (4, ProgressColor.GREEN), (5, ProgressColor.GREEN)],
)
def test_progress_color(count, color):
    assert ProgressColor.for_count(count) is color


def test_checkin_made_while_week_is_saved_carries_over(roster, fixed_now):
    class CheckInDuringAppend(InMemoryLedgerRepository):
        def append_record(self, record):
            super().append_record(record)
            service.add_check_in("alice", "Sam", "late")

    ledger = CheckInDuringAppend()
    history = HistoryService(ledger)
    service = CheckinService(CounterStore(cap=4), history, RosterService(roster, history))
    service.add_check_in("alice", "Sam", "early")

    closed = service.end_week("alice", "Sam", now=fixed_now)

    assert closed.count == 1
    assert [r["notes"] for r in ledger.read_records()] == ["early"]
    assert service.current_count("alice", "Sam") == 1
    assert service.week_snapshot("alice", "Sam").annotations == ("late",)
