"""SQLite connection + schema initialisation."""
from __future__ import annotations
import logging
import os
import sqlite3
import uuid
from datetime import datetime, timezone

import bcrypt

from conceptcraft.core import config

logger = logging.getLogger(__name__)

_MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "migrations")


def get_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(config.DATABASE_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db() -> None:
    """Run all migration SQL files against the database."""
    db_dir = os.path.dirname(config.DATABASE_PATH)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    migration_file = os.path.join(_MIGRATIONS_DIR, "001_init.sql")
    with open(migration_file, "r", encoding="utf-8") as f:
        sql = f.read()
    conn = get_connection()
    try:
        conn.executescript(sql)
        conn.commit()
    finally:
        conn.close()
    _seed_default_admin()


def _seed_default_admin() -> None:
    """Insert the configured default admin when no admin exists yet."""
    conn = get_connection()
    try:
        count = conn.execute("SELECT COUNT(*) FROM admins").fetchone()[0]
        if count:
            return
        hashed = bcrypt.hashpw(
            config.DEFAULT_ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")
        conn.execute(
            """
            INSERT INTO admins (id, username, password_hash, role, is_active, created_at)
            VALUES (?, ?, ?, ?, 1, ?)
            """,
            (
                str(uuid.uuid4()),
                config.DEFAULT_ADMIN_USERNAME,
                hashed,
                "super-admin",
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        conn.commit()
        logger.info("Seeded default admin '%s'", config.DEFAULT_ADMIN_USERNAME)
    finally:
        conn.close()
