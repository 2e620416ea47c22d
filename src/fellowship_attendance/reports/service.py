from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import isoformat_z
from ..members.repository import MemberRepository
from ..sessions.repository import SessionRepository


@dataclass(frozen=True)
class PresentMemberRow:
    """Read-model: one present member of the active session."""

    member_id: str
    name: str
    email: str
    phone: str
    scanned_at: datetime
    is_first_time: bool
    marked_manually: bool

    def to_json(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "is_present": True,
            "scan_time": isoformat_z(self.scanned_at),
            "is_first_time": self.is_first_time,
            "marked_manually": self.marked_manually,
        }


@dataclass(frozen=True)
class SessionStatistics:
    total_present: int
    first_time_count: int
    total_members: int

    def to_json(self) -> dict:
        return {
            "total_present": self.total_present,
            "first_time_count": self.first_time_count,
            "total_members": self.total_members,
        }


@dataclass(frozen=True)
class MembershipRow:
    member_id: str
    name: str
    email: str
    phone: str
    present: bool


class ReportService:
    """Read-only aggregations over the record store."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        sessions: SessionRepository,
    ):
        self._attendance = attendance
        self._members = members
        self._sessions = sessions

    def current_attendance_report(self) -> Sequence[PresentMemberRow]:
        active = self._sessions.get_active()
        if not active:
            return []

        members = {m.member_id: m for m in self._members.list_all()}
        rows: list[PresentMemberRow] = []
        for r in self._attendance.list_for_session(active.session_id):
            member = members.get(r.member_id)
            if not member:
                # Member deleted after marking: unjoinable, left out.
                continue
            rows.append(
                PresentMemberRow(
                    member_id=member.member_id,
                    name=member.name,
                    email=member.email,
                    phone=member.phone,
                    scanned_at=r.scanned_at,
                    is_first_time=r.is_first_time,
                    marked_manually=r.marked_manually,
                )
            )
        rows.sort(key=lambda row: row.scanned_at, reverse=True)
        return rows

    def session_statistics(self, session_id: str) -> SessionStatistics:
        records = self._attendance.list_for_session(session_id)
        return SessionStatistics(
            total_present=len(records),
            first_time_count=sum(1 for r in records if r.is_first_time),
            total_members=self._members.count(),
        )

    def full_membership_report(self) -> Sequence[MembershipRow]:
        active = self._sessions.get_active()
        present_ids: set[str] = set()
        if active:
            present_ids = {r.member_id for r in self._attendance.list_for_session(active.session_id)}

        return [
            MembershipRow(
                member_id=m.member_id,
                name=m.name,
                email=m.email,
                phone=m.phone,
                present=m.member_id in present_ids,
            )
            for m in self._members.list_all()
        ]
