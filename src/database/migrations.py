"""
Schema bootstrap for the schools table

Idempotent: safe to run at every startup. Also runnable on its own:

    python -m database.migrations
"""

import asyncio
import logging

import asyncpg

from utils.errors import StorageError

logger = logging.getLogger(__name__)

SCHOOLS_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS schools (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        address TEXT NOT NULL,
        city TEXT NOT NULL,
        state TEXT NOT NULL,
        contact BIGINT NOT NULL,
        image TEXT,
        email_id VARCHAR(255) NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
"""

# Matches the listing order so the full scan comes back pre-sorted
SCHOOLS_RECENT_INDEX_DDL = """
    CREATE INDEX IF NOT EXISTS ix_schools_created_at_id
    ON schools (created_at DESC, id DESC)
"""

MIGRATIONS = [SCHOOLS_TABLE_DDL, SCHOOLS_RECENT_INDEX_DDL]


async def run_migrations(db_pool: asyncpg.Pool) -> None:
    """Create the schools table and its index if absent"""
    try:
        async with db_pool.acquire() as conn:
            async with conn.transaction():
                for statement in MIGRATIONS:
                    await conn.execute(statement)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError) as e:
        raise StorageError(f"Schema bootstrap failed: {e}") from e

    logger.info("Schools table ready")


async def _main():
    from database.connection import init_database, close_database

    db_pool = await init_database()
    if db_pool is None:
        raise SystemExit("Record store not configured (DB_HOST, DB_USER, DB_NAME)")
    try:
        await run_migrations(db_pool)
    finally:
        await close_database(db_pool)


if __name__ == "__main__":
    from dotenv import load_dotenv

    load_dotenv()
    asyncio.run(_main())
