"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)


async def init_database() -> Optional[asyncpg.Pool]:
    """Create the connection pool, or return None when the store is not configured"""
    if not settings.database_configured():
        logger.warning("Record store not configured - skipping pool creation")
        return None

    db_pool = await asyncpg.create_pool(
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        user=settings.DB_USER,
        password=settings.DB_PASSWORD,
        database=settings.DB_NAME,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=settings.DB_COMMAND_TIMEOUT,
        statement_cache_size=0  # Fix for pgbouncer compatibility
    )

    # Test connection
    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    logger.info(f"Database initialized successfully ({settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME})")
    return db_pool


async def close_database(db_pool: Optional[asyncpg.Pool]):
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")
