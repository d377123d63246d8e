"""Async Postgres connection pool for the repositories.

Every acquired connection uses UTC at the session level so `TIMESTAMPTZ` defaults and returned
timestamps agree with the UTC timestamps produced in Python.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool


async def ensure_utc(conn: AsyncConnection) -> None:
    """Set the session timezone to UTC and leave the connection idle."""

    await conn.execute("SET TIME ZONE 'UTC'", prepare=False)
    # Without autocommit `SET` opens a transaction; the pool must not see INTRANS connections.
    await conn.commit()


def create_pool(
        database_url: str,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create an async DB pool.

    The pool is created with `open=False`; call `await pool.open()` at startup.
    """

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=ensure_utc,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Acquire a pooled connection.

    An open transaction is committed when the block exits, or rolled back on error.
    """

    async with pool.connection() as conn:
        yield conn
