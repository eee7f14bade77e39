"""
Service layer for samples.

This module provides the create and read operations for samples.
Samples are never updated or deleted once written.  The service is
constructed with the application's ``Database`` handle; every call
opens its own connection and closes it before returning.

All queries use parameterized statements to avoid SQL injection
vulnerabilities.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from sample_store_api.app.core.db import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN, Database
from sample_store_api.app.schemas.sample import SampleCreate, SampleRead

logger = logging.getLogger(__name__)


class SampleService:
    """Service class for persisting and retrieving samples."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_sample(self, data: SampleCreate) -> SampleRead:
        """Insert a new sample and return the created record.

        ``v0`` and ``v1`` are written as NULL when they were not
        supplied.
        """
        conn = self.db.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO samples (name, timestamp, v0, v1)
                VALUES (?, ?, ?, ?)
                """,
                (data.name, data.timestamp.isoformat(), data.v0, data.v1),
            )
            sample_id = cursor.lastrowid
            conn.commit()
            logger.info("Created sample %s", sample_id)
            row = cursor.execute(
                "SELECT * FROM samples WHERE id = ?",
                (sample_id,),
            ).fetchone()
            return self._row_to_sample_read(row)
        finally:
            conn.close()

    async def get_sample(self, sample_id: int) -> Optional[SampleRead]:
        """Retrieve a single sample by its ID, or ``None`` if it does not exist.

        IDs outside the SQLite INTEGER range cannot match any row.
        """
        if not SQLITE_INTEGER_MIN <= sample_id <= SQLITE_INTEGER_MAX:
            return None
        conn = self.db.get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM samples WHERE id = ?",
                (sample_id,),
            ).fetchone()
            if not row:
                return None
            return self._row_to_sample_read(row)
        finally:
            conn.close()

    async def list_samples(self) -> List[SampleRead]:
        """Return every stored sample in the store's default order."""
        conn = self.db.get_connection()
        try:
            rows = conn.execute("SELECT * FROM samples").fetchall()
            return [self._row_to_sample_read(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_sample_read(row: sqlite3.Row) -> SampleRead:
        """Convert a database row to a SampleRead schema instance."""
        return SampleRead(
            id=row["id"],
            name=row["name"],
            timestamp=row["timestamp"],
            v0=row["v0"],
            v1=row["v1"],
        )
