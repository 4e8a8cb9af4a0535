"""
Postgres pool for the gallery.

Repositories reach the database only through user_conn() and system_conn().
Both open a transaction and stamp it with `app.user_id`, which the
row-level security policies on the gallery tables read.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from backend.config import settings

logger = logging.getLogger(__name__)

pool: asyncpg.Pool | None = None


async def init_pool() -> None:
    """Open the pool. Runs in the app lifespan, before the first request."""
    global pool
    pool = await asyncpg.create_pool(
        dsn=settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=60,
        init=_init_connection,
    )
    logger.info(
        "Database pool ready (min=%d, max=%d)",
        settings.DB_POOL_MIN_SIZE,
        settings.DB_POOL_MAX_SIZE,
    )


async def close_pool() -> None:
    global pool
    if pool is None:
        return
    await pool.close()
    pool = None
    logger.info("Database pool closed")


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Hand uuid columns back as UUID, matching the ids on the engine types
    await conn.set_type_codec("uuid", encoder=str, decoder=UUID, schema="pg_catalog")


@asynccontextmanager
async def _acquire(acting_user: str):
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    async with pool.acquire() as conn:
        async with conn.transaction():
            # Transaction-local, so the setting never leaks back into the pool
            await conn.execute("SELECT set_config('app.user_id', $1, true)", acting_user)
            yield conn


@asynccontextmanager
async def user_conn(user_id: str | UUID):
    """
    Connection acting for a signed-in user.

    Every gallery read and write goes through here; the RLS policies only
    admit transactions where `app.user_id` is set.

    Usage:
        async with user_conn(user.id) as conn:
            rows = await conn.fetch("SELECT * FROM characters")
    """
    async with _acquire(str(user_id)) as conn:
        yield conn


@asynccontextmanager
async def system_conn():
    """
    Connection with no acting user.

    Only for loading the user named in a session token and for test
    fixtures. Gallery tables are invisible to it under RLS.
    """
    async with _acquire("") as conn:
        yield conn
