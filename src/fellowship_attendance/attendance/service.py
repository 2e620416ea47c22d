from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.exceptions import (
    AlreadyMarkedError,
    DuplicateKeyError,
    MemberNotFoundError,
    NoActiveSessionError,
    SessionNotActiveError,
)
from ..members.repository import MemberRepository
from ..sessions.repository import SessionRepository
from .model import AttendanceRecord, MarkResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: mark a member present at the active session.

    One record per (session, member). The pre-check below is a fast path only;
    the repository insert is what enforces uniqueness.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        sessions: SessionRepository,
    ):
        self._attendance = attendance
        self._members = members
        self._sessions = sessions

    def mark_attendance(
        self,
        session_id: Optional[str],
        member_id: Optional[str],
        *,
        manual: bool = False,
        now: Optional[datetime] = None,
    ) -> MarkResult:
        session_id = require_non_empty(session_id, "Session ID")
        member_id = require_non_empty(member_id, "Member ID")

        session = self._sessions.get_by_id(session_id)
        active = self._sessions.get_active()
        if not session or not active or active.session_id != session_id:
            raise SessionNotActiveError("Session is not active")

        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFoundError("Member not found")

        if self._attendance.get_for_session_and_member(session_id, member_id):
            raise AlreadyMarkedError("Attendance already marked for this session")

        now = now or now_utc()
        is_first_time = self._attendance.count_for_member(member_id) == 0
        if is_first_time:
            self._members.set_first_scan(member_id, now)

        record = AttendanceRecord(
            record_id=str(uuid.uuid4()),
            session_id=session_id,
            member_id=member_id,
            scanned_at=now,
            is_first_time=is_first_time,
            marked_manually=manual,
        )
        try:
            self._attendance.insert(record)
        except DuplicateKeyError as exc:
            raise AlreadyMarkedError("Attendance already marked for this session") from exc

        if manual:
            message = f"{member.name} marked present manually!"
        elif is_first_time:
            message = f"Welcome {member.name}! First time attendance recorded."
        else:
            message = f"Attendance marked for {member.name}!"

        logger.info(
            "attendance %s: member=%s session=%s first_time=%s manual=%s",
            record.record_id, member_id, session_id, is_first_time, manual,
        )
        return MarkResult(
            message=message,
            is_first_time=is_first_time,
            record_id=record.record_id,
            timestamp=now,
        )

    def mark_manual(self, member_id: Optional[str], *, now: Optional[datetime] = None) -> MarkResult:
        """Organizer marks a member present at whatever session is active."""

        member_id = require_non_empty(member_id, "Member ID")
        active = self._sessions.get_active()
        if not active:
            raise NoActiveSessionError("No active session found")
        return self.mark_attendance(active.session_id, member_id, manual=True, now=now)
