from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import SCAN_PATH
from ..core.exceptions import SessionNotActiveError, ValidationError
from .model import AttendanceSession, CreatedSession
from .qr import render_qr_data_url
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def build_scan_url(base_url: str, session_id: str) -> str:
    return f"{base_url.rstrip('/')}{SCAN_PATH}{session_id}"


class SessionService:
    """Use case: open sessions, keeping at most one of them active.

    Note: deactivate_all() and insert() are two separate store operations. Two
    concurrent create_session calls may interleave and leave two sessions active;
    get_active_session() then reports the newest one.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        base_url: str = "",
        qr_renderer: Callable[[str], str] = render_qr_data_url,
    ):
        self._sessions = sessions
        self._base_url = base_url
        self._qr_renderer = qr_renderer

    def create_session(
        self,
        name: Optional[str],
        *,
        session_date: Optional[date] = None,
        base_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CreatedSession:
        name = require_non_empty(name, "Session name")
        base = base_url or self._base_url
        if not base:
            raise ValidationError("Public base URL is not configured")

        now = now or now_utc()
        session_id = str(uuid.uuid4())

        deactivated = self._sessions.deactivate_all()
        session = AttendanceSession(
            session_id=session_id,
            name=name,
            session_date=session_date or now.date(),
            scan_url=build_scan_url(base, session_id),
            is_active=True,
            created_at=now,
        )
        self._sessions.insert(session)
        logger.info("session %r (%s) created, %d previous session(s) deactivated", name, session_id, deactivated)

        return CreatedSession(session=session, qr_code_image=self._qr_renderer(session.scan_url))

    def get_active_session(self) -> Optional[AttendanceSession]:
        return self._sessions.get_active()

    def get_scan_session(self, session_id: str) -> AttendanceSession:
        """The session a scan link points to, if it is still the active one."""

        session = self._sessions.get_by_id(session_id)
        active = self._sessions.get_active()
        if not session or not active or active.session_id != session.session_id:
            raise SessionNotActiveError("Invalid or expired session")
        return session

    def list_sessions(self) -> Sequence[AttendanceSession]:
        return self._sessions.list_all()

    def qr_for(self, session: AttendanceSession) -> str:
        return self._qr_renderer(session.scan_url)
