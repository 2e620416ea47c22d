from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_z


@dataclass(frozen=True)
class Member:
    """Domain entity: a registered member.

    Note: plain data object, no storage code. `email` is always stored normalized
    (stripped, lower-case).
    """

    member_id: str
    name: str
    email: str
    phone: str
    address: str
    created_at: datetime
    first_scan_at: Optional[datetime] = None

    def to_json(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("member_id")
        data["created_at"] = isoformat_z(self.created_at)
        data["first_scan_at"] = isoformat_z(self.first_scan_at) if self.first_scan_at else None
        return data
