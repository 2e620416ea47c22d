from __future__ import annotations

from enum import Enum


class StoreBackend(str, Enum):
    """Which backend the record store was opened with (decided once at startup)."""

    MYSQL = "mysql"
    FALLBACK = "fallback"
