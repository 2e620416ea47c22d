from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member present at one session."""

    record_id: str
    session_id: str
    member_id: str
    scanned_at: datetime
    is_first_time: bool
    marked_manually: bool = False


@dataclass(frozen=True)
class MarkResult:
    message: str
    is_first_time: bool
    record_id: str
    timestamp: datetime
