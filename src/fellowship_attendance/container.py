from __future__ import annotations

from dataclasses import dataclass

from .attendance.service import AttendanceService
from .database.store import RecordStore
from .members.service import MemberService
from .reports.service import ReportService
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    store: RecordStore

    member_service: MemberService
    session_service: SessionService
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(*, store: RecordStore, public_base_url: str = "") -> Container:
    member_service = MemberService(store.members)
    session_service = SessionService(store.sessions, base_url=public_base_url)
    attendance_service = AttendanceService(store.attendance, store.members, store.sessions)
    report_service = ReportService(store.attendance, store.members, store.sessions)

    return Container(
        store=store,
        member_service=member_service,
        session_service=session_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )
