from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from .model import Member
from .repository import MemberRepository


class InMemoryMemberRepository(MemberRepository):
    """Fallback member storage: an insertion-ordered dict keyed by member id."""

    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._by_id: dict[str, Member] = {}

    def list_all(self) -> Sequence[Member]:
        with self._lock:
            return list(self._by_id.values())

    def get_by_id(self, member_id: str) -> Optional[Member]:
        with self._lock:
            return self._by_id.get(member_id)

    def get_by_email(self, email: str) -> Optional[Member]:
        email = email.lower()
        with self._lock:
            for m in self._by_id.values():
                if m.email.lower() == email:
                    return m
            return None

    def insert(self, member: Member) -> Member:
        with self._lock:
            if member.member_id in self._by_id:
                raise DuplicateKeyError("members", member.member_id)
            if self.get_by_email(member.email):
                raise DuplicateKeyError("members", member.email)
            self._by_id[member.member_id] = member
            return member

    def delete_by_id(self, member_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(member_id, None) is not None

    def set_first_scan(self, member_id: str, when: datetime) -> bool:
        with self._lock:
            m = self._by_id.get(member_id)
            if not m or m.first_scan_at is not None:
                return False
            self._by_id[member_id] = replace(m, first_scan_at=when)
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)
