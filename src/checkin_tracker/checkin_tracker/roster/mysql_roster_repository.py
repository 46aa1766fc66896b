from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..history.repository import RawRow
from .repository import RosterRepository


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def read_roster(self, tenant: Optional[str] = None) -> Sequence[RawRow]:
        sql = "SELECT owner, student_name AS student FROM checkin_roster"
        params: tuple = ()
        if tenant is not None:
            sql += " WHERE LOWER(TRIM(owner))=%s OR owner IS NULL OR TRIM(owner)=''"
            params = (tenant.strip().lower(),)
        sql += " ORDER BY roster_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetchall(cur)

    def append_roster_entry(self, tenant: str, subject: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO checkin_roster(owner, student_name) VALUES(%s,%s)",
                (tenant, subject),
            )
