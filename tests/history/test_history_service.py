from __future__ import annotations

from datetime import date

from src.checkin_tracker.checkin_tracker.history.memory_ledger_repository import InMemoryLedgerRepository
from src.checkin_tracker.checkin_tracker.history.service import HistoryService


def test_append_does_not_collapse_duplicates():
    ledger = InMemoryLedgerRepository()
    svc = HistoryService(ledger)

    svc.append(tenant="Alice", subject="Sam", week_ending=date(2024, 3, 15), count=3)
    svc.append(tenant="alice", subject="Sam", week_ending=date(2024, 3, 15), count=5)

    assert len(ledger.read_records()) == 2
    result = svc.read_reconciled("alice", "Sam")
    assert [t.count for t in result] == [5]


def test_read_failure_degrades_to_empty_result():
    ledger = InMemoryLedgerRepository()
    ledger.fail_reads = True

    result = HistoryService(ledger).read_reconciled("alice", "Sam")

    assert result.items == ()
    assert result.degraded
    assert "unavailable" in result.error


def test_blank_subject_reads_nothing():
    ledger = InMemoryLedgerRepository([{"owner": "alice", "student": "Sam", "week_ending": "2024-03-15", "checkins": 2}])

    assert HistoryService(ledger).read_reconciled("alice", "  ").items == ()


def test_subjects_for_uses_first_spelling_and_skips_bad_rows():
    ledger = InMemoryLedgerRepository(
        [
            {"owner": "alice", "student": "Sam", "week_ending": "2024-03-15", "checkins": 2},
            {"owner": "alice", "student": "SAM", "week_ending": "2024-03-08", "checkins": 1},
            {"owner": "alice", "student": "Broken", "week_ending": "2024-03-08", "checkins": "n/a"},
            {"owner": "bob", "student": "Alex", "week_ending": "2024-03-08", "checkins": 1},
        ]
    )

    assert HistoryService(ledger).subjects_for("ALICE").items == ("Sam",)


def test_rows_added_after_appends_are_reconciled_with_them():
    ledger = InMemoryLedgerRepository()
    svc = HistoryService(ledger)
    svc.append(tenant="alice", subject="Sam", week_ending=date(2024, 3, 15), count=3)

    ledger.add_raw({"owner": "alice", "student": "Sam", "week_ending": "2024-03-15", "checkins": "6"})
    ledger.add_raw({"owner": "alice", "student": "Sam", "week_ending": "2024-03-15", "checkins": True})
    ledger.add_raw({"owner": "alice", "student": "Sam", "checkins": 9})
    ledger.add_raw({"owner": "alice", "student": "Sam", "week_ending": "not a date", "checkins": 9})

    result = svc.read_reconciled("alice", "Sam")

    assert [(t.week_ending, t.count) for t in result] == [(date(2024, 3, 15), 6)]
