from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_session_and_member(self, session_id: str, member_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_member(self, member_id: str) -> int:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert one record; raises DuplicateKeyError if the (session, member) pair exists."""

        raise NotImplementedError
