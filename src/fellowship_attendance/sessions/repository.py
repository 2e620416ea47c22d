from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class SessionRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceSession]:
        """Every session, newest first."""

        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_active(self) -> Optional[AttendanceSession]:
        """Newest session with is_active set, or None."""

        raise NotImplementedError

    def insert(self, session: AttendanceSession) -> AttendanceSession:
        raise NotImplementedError

    def deactivate_all(self) -> int:
        raise NotImplementedError
