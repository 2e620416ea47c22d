from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, session_id, member_id, scanned_at, is_first_time, marked_manually"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=row["record_id"],
        session_id=row["session_id"],
        member_id=row["member_id"],
        scanned_at=row["scanned_at"],
        is_first_time=bool(row["is_first_time"]),
        marked_manually=bool(row.get("marked_manually")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_session_and_member(self, session_id: str, member_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, collection="attendance_records") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_id=%s AND member_id=%s",
                (session_id, member_id),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory, collection="attendance_records") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY scanned_at ASC
                """,
                (session_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_member(self, member_id: str) -> int:
        with db_cursor(self._conn_factory, collection="attendance_records") as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records WHERE member_id=%s", (member_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory, collection="attendance_records") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(record_id, session_id, member_id, scanned_at, is_first_time, marked_manually)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.session_id,
                    record.member_id,
                    record.scanned_at,
                    1 if record.is_first_time else 0,
                    1 if record.marked_manually else 0,
                ),
            )
        return record
