from __future__ import annotations

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Current time as a naive UTC datetime (what MySQL DATETIME stores).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_utc() -> date:
    return now_utc().date()


def isoformat_z(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds") + "Z"
