from __future__ import annotations

from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_ENTRY
from ..core.exceptions import DuplicateKeyError, StoreUnavailableError
from .connection import DatabaseConnection


def _rollback_quietly(conn) -> None:
    # A dropped connection fails the rollback too; the first error is the one to report.
    with suppress(mysql.connector.Error):
        conn.rollback()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, collection: str = "", dictionary: bool = True):
    """Yield (conn, cursor) and commit on success.

    Driver errors never leave this block as mysql.connector types: a duplicate
    entry becomes DuplicateKeyError, everything else StoreUnavailableError.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StoreUnavailableError(f"cannot connect to MySQL: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            with suppress(mysql.connector.Error):
                cur.close()
    except mysql.connector.IntegrityError as exc:
        _rollback_quietly(conn)
        if exc.errno == MYSQL_DUPLICATE_ENTRY:
            raise DuplicateKeyError(collection, str(exc.msg)) from exc
        raise StoreUnavailableError(str(exc)) from exc
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise StoreUnavailableError(str(exc)) from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        with suppress(mysql.connector.Error):
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
