from __future__ import annotations

import logging
import os
import sqlite3
import threading
from datetime import datetime, timezone

from resume_tailor.core.config import settings

logger = logging.getLogger(__name__)

RESUME_COUNTER = "resumes_analyzed"

_conn: sqlite3.Connection | None = None
_conn_path: str | None = None
_conn_lock = threading.Lock()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_connection() -> sqlite3.Connection:
    global _conn, _conn_path
    with _conn_lock:
        db_path = settings.counter_db_path
        if _conn is not None and _conn_path == db_path:
            return _conn

        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn_path = db_path
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS counters (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL DEFAULT 0,
                updated_at TEXT NOT NULL
            );
            """
        )
        return _conn


def init_counter_store() -> None:
    _get_connection()


def get_count(name: str = RESUME_COUNTER) -> int:
    conn = _get_connection()
    with _conn_lock:
        row = conn.execute("SELECT value FROM counters WHERE name = ?", (name,)).fetchone()
    return int(row[0]) if row else 0


def increment(name: str = RESUME_COUNTER) -> int:
    conn = _get_connection()
    with _conn_lock:
        cursor = conn.cursor()
        cursor.execute("BEGIN IMMEDIATE")
        try:
            cursor.execute(
                """
                INSERT INTO counters (name, value, updated_at) VALUES (?, 1, ?)
                ON CONFLICT(name) DO UPDATE SET value = value + 1, updated_at = excluded.updated_at
                """,
                (name, _utc_now()),
            )
            value = int(cursor.execute("SELECT value FROM counters WHERE name = ?", (name,)).fetchone()[0])
            conn.commit()
        except Exception:
            conn.rollback()
            raise
    logger.info("counter_incremented name=%s value=%s", name, value)
    return value


def reset(name: str = RESUME_COUNTER) -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM counters WHERE name = ?", (name,))
