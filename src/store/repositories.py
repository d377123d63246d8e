"""Repository interfaces for per-user preferences.

Handlers and the chat service depend on these protocols only. `src.store.memory` and
`src.store.postgres` provide the implementations; `src.app` picks one at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from src.catalog.models import AnimeData

RECENT_SEARCHES_LIMIT = 20


@dataclass(frozen=True)
class RecentSearch:
    """One stored search; `search_id` stays stable while newer searches are added."""

    search_id: int
    query: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class FavoritesRepository(Protocol):
    async def list(self, user_id: int) -> list[AnimeData]: ...

    async def add(self, user_id: int, anime: AnimeData) -> None:
        """Add a favorite; adding an already-saved anime (same `mal_id`) is a no-op."""

    async def remove(self, user_id: int, mal_id: int) -> None: ...

    async def is_favorite(self, user_id: int, mal_id: int) -> bool: ...

    async def toggle(self, user_id: int, anime: AnimeData) -> bool:
        """Add or remove a favorite. Returns True if the anime is a favorite afterwards."""

    async def clear(self, user_id: int) -> None: ...

    async def count(self, user_id: int) -> int: ...


class RecentSearchRepository(Protocol):
    async def add(self, user_id: int, query: str) -> None:
        """Record a search as the newest entry, keeping at most the configured limit."""

    async def list(self, user_id: int) -> list[RecentSearch]:
        """Return recent searches, newest first."""

    async def get(self, user_id: int, search_id: int) -> RecentSearch | None:
        """Return one stored search, or None once it was trimmed or cleared."""

    async def clear(self, user_id: int) -> None: ...


class PreferencesRepository(Protocol):
    async def is_dark_mode(self, user_id: int) -> bool: ...

    async def set_dark_mode(self, user_id: int, enabled: bool) -> None: ...

    async def toggle_dark_mode(self, user_id: int) -> bool:
        """Flip the theme flag and return the new value."""


@dataclass(frozen=True)
class Repositories:
    """The set of storage collaborators handed to handlers."""

    favorites: FavoritesRepository
    recent_searches: RecentSearchRepository
    preferences: PreferencesRepository
