from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members.

    Note (DIP): services depend on this interface, never on a concrete backend.
    `insert` is the authoritative uniqueness check on id and email and raises
    `DuplicateKeyError` on a clash.
    """

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError

    def get_by_id(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def insert(self, member: Member) -> Member:
        raise NotImplementedError

    def delete_by_id(self, member_id: str) -> bool:
        raise NotImplementedError

    def set_first_scan(self, member_id: str, when: datetime) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
