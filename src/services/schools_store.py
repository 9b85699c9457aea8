"""
Record store for school rows
"""

import asyncio
import logging
from typing import List, Optional

import asyncpg

from models.school import SchoolRecord, SchoolSummary
from utils.errors import StorageError

logger = logging.getLogger(__name__)

STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError)

INSERT_SCHOOL_SQL = """
    INSERT INTO schools (name, address, city, state, contact, image, email_id)
    VALUES ($1, $2, $3, $4, $5, $6, $7)
    RETURNING id
"""

LIST_RECENT_SQL = """
    SELECT id, name, address, city, image
    FROM schools
    ORDER BY created_at DESC, id DESC
"""


class SchoolStore:
    """Access layer over the schools table"""

    def __init__(self, db_pool: Optional[asyncpg.Pool]):
        self.db_pool = db_pool

    def _require_pool(self) -> asyncpg.Pool:
        if self.db_pool is None:
            raise StorageError("Record store is not configured")
        return self.db_pool

    async def insert(self, record: SchoolRecord) -> int:
        """Insert one school row and return its assigned id"""
        db_pool = self._require_pool()
        try:
            async with db_pool.acquire() as conn:
                school_id = await conn.fetchval(
                    INSERT_SCHOOL_SQL,
                    record.name, record.address, record.city, record.state,
                    record.contact, record.image, record.email_id
                )
        except STORE_ERRORS as e:
            raise StorageError(f"Insert into schools failed: {e}") from e

        if school_id is None:
            raise StorageError("Insert into schools returned no id")
        return school_id

    async def list_recent(self) -> List[SchoolSummary]:
        """All schools, newest first"""
        db_pool = self._require_pool()
        try:
            async with db_pool.acquire() as conn:
                rows = await conn.fetch(LIST_RECENT_SQL)
        except STORE_ERRORS as e:
            raise StorageError(f"Listing schools failed: {e}") from e

        return [SchoolSummary(**dict(row)) for row in rows]

    async def ping(self) -> None:
        db_pool = self._require_pool()
        try:
            async with db_pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except STORE_ERRORS as e:
            raise StorageError(f"Record store unreachable: {e}") from e
