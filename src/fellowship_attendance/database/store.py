from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..attendance.memory_attendance_repository import InMemoryAttendanceRepository
from ..attendance.mysql_attendance_repository import MySQLAttendanceRepository
from ..attendance.repository import AttendanceRepository
from ..core.enums import StoreBackend
from ..core.exceptions import StoreError
from ..members.memory_member_repository import InMemoryMemberRepository
from ..members.mysql_member_repository import MySQLMemberRepository
from ..members.repository import MemberRepository
from ..sessions.memory_session_repository import InMemorySessionRepository
from ..sessions.mysql_session_repository import MySQLSessionRepository
from ..sessions.repository import SessionRepository
from .bootstrap import apply_schema
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordStore:
    """Handle over the three collections, bound to one backend for the process lifetime."""

    backend: StoreBackend
    members: MemberRepository
    sessions: SessionRepository
    attendance: AttendanceRepository
    conn: Optional[DatabaseConnection] = None

    @property
    def using_fallback(self) -> bool:
        return self.backend == StoreBackend.FALLBACK

    def close(self) -> None:
        """Shutdown hook. Only logs: connections are opened per operation, so nothing is held open."""

        if self.conn is not None:
            logger.info("record store closed (%s)", self.conn.config.describe())
        else:
            logger.info("in-memory record store discarded")


def build_memory_store() -> RecordStore:
    lock = threading.RLock()
    return RecordStore(
        backend=StoreBackend.FALLBACK,
        members=InMemoryMemberRepository(lock),
        sessions=InMemorySessionRepository(lock),
        attendance=InMemoryAttendanceRepository(lock),
    )


def build_mysql_store(conn: DatabaseConnection) -> RecordStore:
    return RecordStore(
        backend=StoreBackend.MYSQL,
        members=MySQLMemberRepository(conn),
        sessions=MySQLSessionRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        conn=conn,
    )


def open_record_store(*, backend: str, db_config: dict, auto_init_db: bool = True) -> RecordStore:
    """Pick the backend once.

    With backend="memory" the fallback is used directly. Otherwise MySQL is tried
    (schema when auto_init_db is set, then a ping); any failure switches to the
    fallback for good.
    """

    if str(backend).lower() == "memory":
        logger.info("using in-memory store (STORE_BACKEND=memory)")
        return build_memory_store()

    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config)
    try:
        logger.info("connecting to MySQL at %s", config.describe())
        if auto_init_db:
            apply_schema(config)
        conn.ping()
    except (mysql.connector.Error, StoreError, OSError) as exc:
        logger.error("failed to connect to MySQL: %s", exc)
        logger.warning("falling back to in-memory storage (data will not persist)")
        return build_memory_store()

    logger.info("connected to MySQL successfully")
    return build_mysql_store(conn)
