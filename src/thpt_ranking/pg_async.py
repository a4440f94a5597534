"""
Async PostgreSQL connection manager.

Uses psycopg3's native async support so a batch of lookups can run
concurrently on one event loop.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .core.config import get_settings

logger = logging.getLogger(__name__)


class AsyncPostgresDB:
    """
    Async PostgreSQL database connection manager.

    Provides non-blocking database operations using psycopg3's async API
    with connection pooling.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        min_pool_size: Optional[int] = None,
        max_pool_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the async PostgreSQL connection manager.

        Args:
            connection_string: PostgreSQL connection URL. Defaults to DATABASE_URL.
            min_pool_size: Minimum connections to keep in pool.
            max_pool_size: Maximum connections in pool.
            timeout: Seconds to wait for a pooled connection.
        """
        settings = get_settings()
        self.connection_string = connection_string or settings.db_url
        if not self.connection_string:
            raise ValueError(
                "DATABASE_URL environment variable required or connection_string must be provided"
            )

        self._min_pool_size = (
            min_pool_size if min_pool_size is not None else settings.database_min_pool_size
        )
        self._max_pool_size = max_pool_size or settings.database_pool_size
        self._timeout = timeout or settings.database_pool_timeout
        self._pool: Optional[AsyncConnectionPool] = None

    async def initialize(self) -> None:
        """Initialize the connection pool. Call this at app startup."""
        if self._pool is None:
            self._pool = AsyncConnectionPool(
                self.connection_string,
                min_size=self._min_pool_size,
                max_size=self._max_pool_size,
                timeout=self._timeout,
                kwargs={"row_factory": dict_row},
                open=False,
            )
            await self._pool.open()
            logger.info(
                "Database connection pool opened (min_size=%d, max_size=%d)",
                self._min_pool_size,
                self._max_pool_size,
            )

    async def close(self) -> None:
        """Close the connection pool. Call this at app shutdown."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """Get a connection from the pool."""
        if self._pool is None:
            await self.initialize()
        async with self._pool.connection() as conn:
            yield conn

    async def execute(self, query: str, params: tuple = ()) -> None:
        """Execute a single query without returning results."""
        async with self.get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
            await conn.commit()

    async def executescript(self, sql: str) -> None:
        """Execute a SQL script (multiple statements, no parameters)."""
        async with self.get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql)
            await conn.commit()

    async def fetchone(self, query: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        """Execute a query and fetch one result as a dict."""
        async with self.get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                row = await cur.fetchone()
                return dict(row) if row else None

    async def fetchall(self, query: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and fetch all results as dicts."""
        async with self.get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                rows = await cur.fetchall()
                return [dict(row) for row in rows]


# Global instance
_async_db: Optional[AsyncPostgresDB] = None


async def get_async_db() -> AsyncPostgresDB:
    """
    Get the global async database instance, opening its pool on first use.

    Returns:
        AsyncPostgresDB instance
    """
    global _async_db
    if _async_db is None:
        db = AsyncPostgresDB()
        await db.initialize()
        _async_db = db
    return _async_db


async def close_async_db() -> None:
    """Close the global async database connection."""
    global _async_db
    if _async_db is not None:
        await _async_db.close()
        _async_db = None
