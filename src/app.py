"""Application composition root.

This module wires together configuration, the catalog client, storage and the chat service for
the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from src.catalog.client import JikanClient
from src.chat.service import ChatService
from src.config.settings import Settings
from src.db.pool import create_pool
from src.store.memory import create_memory_repositories
from src.store.postgres import create_postgres_repositories
from src.store.repositories import Repositories


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    catalog: JikanClient
    repositories: Repositories
    chat: ChatService
    pool: AsyncConnectionPool | None = None

    async def start(self) -> None:
        if self.pool is not None:
            await self.pool.open(wait=True)

    async def close(self) -> None:
        await self.catalog.aclose()
        if self.pool is not None:
            await self.pool.close()


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The returned DB pool (if any) is not opened. Call `await app.start()` at startup.
    """

    catalog = JikanClient(settings.jikan_api_base, timeout_s=settings.jikan_timeout_s)

    pool = None
    if settings.database_url:
        pool = create_pool(settings.database_url, max_size=10)
        repositories = create_postgres_repositories(
            pool, recent_searches_limit=settings.recent_searches_limit
        )
    else:
        repositories = create_memory_repositories(recent_searches_limit=settings.recent_searches_limit)

    chat = ChatService(catalog, repositories.recent_searches)
    return App(settings=settings, catalog=catalog, repositories=repositories, chat=chat, pool=pool)
