from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, name, email, phone, address, created_at, first_scan_at"


def _to_member(row: dict) -> Member:
    return Member(
        member_id=row["member_id"],
        name=row["name"],
        email=row["email"],
        phone=row.get("phone") or "",
        address=row.get("address") or "",
        created_at=row["created_at"],
        first_scan_at=row.get("first_scan_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY created_at ASC")
            return [_to_member(r) for r in fetchall(cur)]

    def get_by_id(self, member_id: str) -> Optional[Member]:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (member_id,))
            row = fetchone(cur)
            return _to_member(row) if row else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_member(row) if row else None

    def insert(self, member: Member) -> Member:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute(
                """
                INSERT INTO members(member_id, name, email, phone, address, created_at, first_scan_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    member.member_id,
                    member.name,
                    member.email,
                    member.phone,
                    member.address,
                    member.created_at,
                    member.first_scan_at,
                ),
            )
        return member

    def delete_by_id(self, member_id: str) -> bool:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (member_id,))
            return cur.rowcount > 0

    def set_first_scan(self, member_id: str, when: datetime) -> bool:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute(
                "UPDATE members SET first_scan_at=%s WHERE member_id=%s AND first_scan_at IS NULL",
                (when, member_id),
            )
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory, collection="members") as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM members")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
