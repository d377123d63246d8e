"""Process-local repositories.

Used when no `DATABASE_URL` is configured (and in tests). Data is lost on restart.
"""

from __future__ import annotations

from collections import defaultdict
from itertools import count

from src.catalog.models import AnimeData
from src.store.repositories import RECENT_SEARCHES_LIMIT, RecentSearch, Repositories


class InMemoryFavoritesRepository:
    def __init__(self) -> None:
        self._favorites: dict[int, list[AnimeData]] = defaultdict(list)

    async def list(self, user_id: int) -> list[AnimeData]:
        return list(self._favorites[user_id])

    async def add(self, user_id: int, anime: AnimeData) -> None:
        if not await self.is_favorite(user_id, anime.mal_id):
            self._favorites[user_id].append(anime)

    async def remove(self, user_id: int, mal_id: int) -> None:
        self._favorites[user_id] = [a for a in self._favorites[user_id] if a.mal_id != mal_id]

    async def is_favorite(self, user_id: int, mal_id: int) -> bool:
        return any(a.mal_id == mal_id for a in self._favorites[user_id])

    async def toggle(self, user_id: int, anime: AnimeData) -> bool:
        if await self.is_favorite(user_id, anime.mal_id):
            await self.remove(user_id, anime.mal_id)
            return False
        await self.add(user_id, anime)
        return True

    async def clear(self, user_id: int) -> None:
        self._favorites.pop(user_id, None)

    async def count(self, user_id: int) -> int:
        return len(self._favorites[user_id])


class InMemoryRecentSearchRepository:
    def __init__(self, limit: int = RECENT_SEARCHES_LIMIT) -> None:
        self.limit = limit
        self._searches: dict[int, list[RecentSearch]] = defaultdict(list)
        self._ids = count(1)

    async def add(self, user_id: int, query: str) -> None:
        searches = self._searches[user_id]
        searches.insert(0, RecentSearch(search_id=next(self._ids), query=query))
        del searches[self.limit:]

    async def list(self, user_id: int) -> list[RecentSearch]:
        return list(self._searches[user_id])

    async def get(self, user_id: int, search_id: int) -> RecentSearch | None:
        return next((s for s in self._searches[user_id] if s.search_id == search_id), None)

    async def clear(self, user_id: int) -> None:
        self._searches.pop(user_id, None)


class InMemoryPreferencesRepository:
    def __init__(self) -> None:
        self._dark_mode: dict[int, bool] = {}

    async def is_dark_mode(self, user_id: int) -> bool:
        return self._dark_mode.get(user_id, False)

    async def set_dark_mode(self, user_id: int, enabled: bool) -> None:
        self._dark_mode[user_id] = enabled

    async def toggle_dark_mode(self, user_id: int) -> bool:
        enabled = not await self.is_dark_mode(user_id)
        await self.set_dark_mode(user_id, enabled)
        return enabled


def create_memory_repositories(*, recent_searches_limit: int = RECENT_SEARCHES_LIMIT) -> Repositories:
    return Repositories(
        favorites=InMemoryFavoritesRepository(),
        recent_searches=InMemoryRecentSearchRepository(limit=recent_searches_limit),
        preferences=InMemoryPreferencesRepository(),
    )
