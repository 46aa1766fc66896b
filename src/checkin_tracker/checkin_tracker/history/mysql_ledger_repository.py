from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LedgerRecord
from .repository import LedgerRepository, RawRow


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def read_records(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        sql = """
            SELECT owner, student_name AS student, week_ending, checkins, notes
            FROM weekly_history
        """
        params: tuple = ()
        if tenant is not None:
            sql += " WHERE LOWER(TRIM(owner))=%s"
            params = (tenant.strip().lower(),)
        sql += " ORDER BY history_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetchall(cur)

    def append_record(self, record: LedgerRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO weekly_history(owner, student_name, week_ending, checkins, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (record.owner, record.subject, record.week_ending, int(record.count), record.annotation_summary),
            )
