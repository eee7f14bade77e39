"""
SQLite database integration and simple migration system.

The ``Database`` class wraps the location of a SQLite database file and
provides connections (``get_connection``), a cursor context manager
(``get_cursor``) and the migration runner (``init_db``) executed when
the application starts.  One instance is built per application and
handed to the services that need it.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

# Range of a SQLite INTEGER; larger Python ints cannot be bound.
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1

# Append new migrations with an incremented version number.  Never edit
# a migration that has already shipped.
MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        -- v0 and v1 are nullable so that a reading which was not supplied
        -- is stored as NULL rather than 0.
        CREATE TABLE IF NOT EXISTS samples (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK (length(name) > 0),
            timestamp TEXT NOT NULL,
            v0 REAL,
            v1 REAL
        );
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Accepts either a plain filesystem path or a ``sqlite:///`` URL.
    Absolute paths are used directly; relative paths are resolved
    against the current working directory.
    """
    db_url = database_url
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    if os.path.isabs(db_url):
        return db_url
    return str((Path.cwd() / db_url).resolve())


class Database:
    """Handle on the SQLite database backing the sample store."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        The connection uses a row factory to access columns by name.  No
        type detection is enabled; timestamps come back as the ISO text
        they were stored as and are parsed by the schema layer.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Context manager that yields a cursor and closes the connection on exit."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any migrations from
        ``MIGRATIONS`` with a higher version.  Errors propagate so that a
        database which cannot be opened aborts application startup.
        """
        logger.info("Using database %s", self.path)
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s", version)
                    current_version = version
