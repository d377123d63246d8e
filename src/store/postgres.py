"""Postgres-backed repositories (psycopg3 async pool).

Tables are created by the SQL migrations in `src/db/migrations/`. All statements are
parameterized; favorites are stored as JSONB snapshots of the catalog record so the list can be
shown without calling the API again.
"""

from __future__ import annotations

from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from src.catalog.models import AnimeData
from src.db.pool import get_conn
from src.store.repositories import RECENT_SEARCHES_LIMIT, RecentSearch, Repositories


class PostgresFavoritesRepository:
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def list(self, user_id: int) -> list[AnimeData]:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT anime FROM favorites WHERE user_id = %s ORDER BY added_at, mal_id",
                    (user_id,),
                )
                rows = await cur.fetchall()
        return [AnimeData.model_validate(row[0]) for row in rows]

    async def add(self, user_id: int, anime: AnimeData) -> None:
        async with get_conn(self.pool) as conn:
            await conn.execute(
                "INSERT INTO favorites (user_id, mal_id, anime) VALUES (%s, %s, %s) "
                "ON CONFLICT (user_id, mal_id) DO NOTHING",
                (user_id, anime.mal_id, Jsonb(anime.model_dump(mode="json"))),
            )

    async def remove(self, user_id: int, mal_id: int) -> None:
        async with get_conn(self.pool) as conn:
            await conn.execute(
                "DELETE FROM favorites WHERE user_id = %s AND mal_id = %s",
                (user_id, mal_id),
            )

    async def is_favorite(self, user_id: int, mal_id: int) -> bool:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT 1 FROM favorites WHERE user_id = %s AND mal_id = %s",
                    (user_id, mal_id),
                )
                row = await cur.fetchone()
        return row is not None

    async def toggle(self, user_id: int, anime: AnimeData) -> bool:
        if await self.is_favorite(user_id, anime.mal_id):
            await self.remove(user_id, anime.mal_id)
            return False
        await self.add(user_id, anime)
        return True

    async def clear(self, user_id: int) -> None:
        async with get_conn(self.pool) as conn:
            await conn.execute("DELETE FROM favorites WHERE user_id = %s", (user_id,))

    async def count(self, user_id: int) -> int:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT COUNT(*) FROM favorites WHERE user_id = %s", (user_id,))
                row = await cur.fetchone()
        return int(row[0]) if row else 0


class PostgresRecentSearchRepository:
    def __init__(self, pool: AsyncConnectionPool, *, limit: int = RECENT_SEARCHES_LIMIT) -> None:
        self.pool = pool
        self.limit = limit

    async def add(self, user_id: int, query: str) -> None:
        async with get_conn(self.pool) as conn:
            async with conn.transaction():
                await conn.execute(
                    "INSERT INTO recent_searches (user_id, query) VALUES (%s, %s)",
                    (user_id, query),
                )
                # Keep only the newest `limit` rows for this user.
                await conn.execute(
                    """
                    DELETE FROM recent_searches
                    WHERE user_id = %s
                      AND id NOT IN (
                        SELECT id FROM recent_searches
                        WHERE user_id = %s
                        ORDER BY searched_at DESC, id DESC
                        LIMIT %s
                      )
                    """,
                    (user_id, user_id, self.limit),
                )

    async def list(self, user_id: int) -> list[RecentSearch]:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT id, query, searched_at FROM recent_searches WHERE user_id = %s "
                    "ORDER BY searched_at DESC, id DESC LIMIT %s",
                    (user_id, self.limit),
                )
                rows = await cur.fetchall()
        return [RecentSearch(search_id=row[0], query=row[1], timestamp=row[2]) for row in rows]

    async def get(self, user_id: int, search_id: int) -> RecentSearch | None:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT id, query, searched_at FROM recent_searches WHERE user_id = %s AND id = %s",
                    (user_id, search_id),
                )
                row = await cur.fetchone()
        if row is None:
            return None
        return RecentSearch(search_id=row[0], query=row[1], timestamp=row[2])

    async def clear(self, user_id: int) -> None:
        async with get_conn(self.pool) as conn:
            await conn.execute("DELETE FROM recent_searches WHERE user_id = %s", (user_id,))


class PostgresPreferencesRepository:
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def is_dark_mode(self, user_id: int) -> bool:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT dark_mode FROM user_preferences WHERE user_id = %s",
                    (user_id,),
                )
                row = await cur.fetchone()
        return bool(row[0]) if row else False

    async def set_dark_mode(self, user_id: int, enabled: bool) -> None:
        async with get_conn(self.pool) as conn:
            await conn.execute(
                "INSERT INTO user_preferences (user_id, dark_mode) VALUES (%s, %s) "
                "ON CONFLICT (user_id) DO UPDATE SET dark_mode = EXCLUDED.dark_mode, updated_at = NOW()",
                (user_id, enabled),
            )

    async def toggle_dark_mode(self, user_id: int) -> bool:
        async with get_conn(self.pool) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO user_preferences (user_id, dark_mode) VALUES (%s, TRUE)
                    ON CONFLICT (user_id) DO UPDATE
                        SET dark_mode = NOT user_preferences.dark_mode, updated_at = NOW()
                    RETURNING dark_mode
                    """,
                    (user_id,),
                )
                row = await cur.fetchone()
        return bool(row[0]) if row else False


def create_postgres_repositories(
        pool: AsyncConnectionPool,
        *,
        recent_searches_limit: int = RECENT_SEARCHES_LIMIT,
) -> Repositories:
    return Repositories(
        favorites=PostgresFavoritesRepository(pool),
        recent_searches=PostgresRecentSearchRepository(pool, limit=recent_searches_limit),
        preferences=PostgresPreferencesRepository(pool),
    )
