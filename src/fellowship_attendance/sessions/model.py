from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import isoformat_z


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: a meeting attendance is taken for."""

    session_id: str
    name: str
    session_date: date
    scan_url: str
    is_active: bool
    created_at: datetime

    def to_json(self) -> dict:
        return {
            "id": self.session_id,
            "session_name": self.name,
            "session_date": self.session_date.isoformat(),
            "qr_data": self.scan_url,
            "is_active": self.is_active,
            "created_at": isoformat_z(self.created_at),
        }


@dataclass(frozen=True)
class CreatedSession:
    session: AttendanceSession
    qr_code_image: str
