from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from .model import AttendanceSession
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._by_id: dict[str, AttendanceSession] = {}

    def list_all(self) -> Sequence[AttendanceSession]:
        with self._lock:
            items = list(self._by_id.values())
        items.sort(key=lambda s: s.created_at, reverse=True)
        return items

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        with self._lock:
            return self._by_id.get(session_id)

    def get_active(self) -> Optional[AttendanceSession]:
        # Same rule as the SQL query: newest active session wins.
        for s in self.list_all():
            if s.is_active:
                return s
        return None

    def insert(self, session: AttendanceSession) -> AttendanceSession:
        with self._lock:
            if session.session_id in self._by_id:
                raise DuplicateKeyError("attendance_sessions", session.session_id)
            self._by_id[session.session_id] = session
            return session

    def deactivate_all(self) -> int:
        changed = 0
        with self._lock:
            for sid, s in self._by_id.items():
                if s.is_active:
                    self._by_id[sid] = replace(s, is_active=False)
                    changed += 1
        return changed
