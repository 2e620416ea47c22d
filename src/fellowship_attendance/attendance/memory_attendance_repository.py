from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Fallback attendance storage keyed by (session_id, member_id).

    The insert re-checks the key under the lock, which stands in for the unique
    index the MySQL table has.
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._by_pair: dict[tuple[str, str], AttendanceRecord] = {}

    def get_for_session_and_member(self, session_id: str, member_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_pair.get((session_id, member_id))

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_pair.values() if r.session_id == session_id]
        items.sort(key=lambda r: r.scanned_at)
        return items

    def count_for_member(self, member_id: str) -> int:
        with self._lock:
            return sum(1 for r in self._by_pair.values() if r.member_id == member_id)

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.session_id, record.member_id)
        with self._lock:
            if key in self._by_pair:
                raise DuplicateKeyError("attendance_records", f"{record.session_id}-{record.member_id}")
            if any(r.record_id == record.record_id for r in self._by_pair.values()):
                raise DuplicateKeyError("attendance_records", record.record_id)
            self._by_pair[key] = record
            return record
