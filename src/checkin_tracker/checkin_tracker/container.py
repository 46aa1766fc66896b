from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .checkins.service import CheckinService
from .core.constants import DEFAULT_CHECKIN_CAP, DEFAULT_WEEKLY_GOAL
from .core.enums import StorageBackend
from .core.exceptions import ValidationError
from .counters.store import CounterStore
from .database.connection import DBConfig, DatabaseConnection
from .history.csv_ledger_repository import CSVLedgerRepository
from .history.memory_ledger_repository import InMemoryLedgerRepository
from .history.mysql_ledger_repository import MySQLLedgerRepository
from .history.repository import LedgerRepository
from .history.service import HistoryService
from .roster.csv_roster_repository import CSVRosterRepository
from .roster.memory_roster_repository import InMemoryRosterRepository
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .roster.service import RosterService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    ledger_repo: LedgerRepository
    roster_repo: RosterRepository
    counters: CounterStore

    history_service: HistoryService
    roster_service: RosterService
    checkin_service: CheckinService


def build_repositories(
    backend: StorageBackend,
    *,
    db_config: Optional[dict] = None,
    csv_data_dir: Optional[str | Path] = None,
) -> tuple[Optional[DatabaseConnection], LedgerRepository, RosterRepository]:
    if backend is StorageBackend.MYSQL:
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        return conn, MySQLLedgerRepository(conn), MySQLRosterRepository(conn)

    if backend is StorageBackend.CSV:
        if not csv_data_dir:
            raise ValidationError("CSV_DATA_DIR is required for the csv backend")
        data_dir = Path(csv_data_dir)
        return None, CSVLedgerRepository(data_dir / "history.csv"), CSVRosterRepository(data_dir / "roster.csv")

    return None, InMemoryLedgerRepository(), InMemoryRosterRepository()


def build_container(
    *,
    backend: StorageBackend | str = StorageBackend.MEMORY,
    db_config: Optional[dict] = None,
    csv_data_dir: Optional[str | Path] = None,
    checkin_cap: int = DEFAULT_CHECKIN_CAP,
    weekly_goal: int = DEFAULT_WEEKLY_GOAL,
) -> Container:
    if not isinstance(backend, StorageBackend):
        try:
            backend = StorageBackend(str(backend).strip().lower())
        except ValueError as e:
            raise ValidationError(f"Unknown storage backend: {backend!r}") from e

    conn, ledger_repo, roster_repo = build_repositories(backend, db_config=db_config, csv_data_dir=csv_data_dir)

    counters = CounterStore(cap=checkin_cap)
    history_service = HistoryService(ledger_repo)
    roster_service = RosterService(roster_repo, history_service)
    checkin_service = CheckinService(counters, history_service, roster_service, weekly_goal=weekly_goal)

    return Container(
        conn=conn,
        ledger_repo=ledger_repo,
        roster_repo=roster_repo,
        counters=counters,
        history_service=history_service,
        roster_service=roster_service,
        checkin_service=checkin_service,
    )
