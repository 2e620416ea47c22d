from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceSession
from .repository import SessionRepository

_COLUMNS = "session_id, session_name, session_date, scan_url, is_active, created_at"


def _to_session(row: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=row["session_id"],
        name=row["session_name"],
        session_date=row["session_date"],
        scan_url=row["scan_url"],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory, collection="attendance_sessions") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions ORDER BY created_at DESC")
            return [_to_session(r) for r in fetchall(cur)]

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory, collection="attendance_sessions") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (session_id,))
            row = fetchone(cur)
            return _to_session(row) if row else None

    def get_active(self) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory, collection="attendance_sessions") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE is_active=1
                ORDER BY created_at DESC
                LIMIT 1
                """
            )
            row = fetchone(cur)
            return _to_session(row) if row else None

    def insert(self, session: AttendanceSession) -> AttendanceSession:
        with db_cursor(self._conn_factory, collection="attendance_sessions") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(session_id, session_name, session_date, scan_url, is_active, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.session_id,
                    session.name,
                    session.session_date,
                    session.scan_url,
                    1 if session.is_active else 0,
                    session.created_at,
                ),
            )
        return session

    def deactivate_all(self) -> int:
        with db_cursor(self._conn_factory, collection="attendance_sessions") as (_, cur):
            cur.execute("UPDATE attendance_sessions SET is_active=0 WHERE is_active=1")
            return cur.rowcount
