"""Intent-to-catalog dispatch."""

from __future__ import annotations

from typing import Protocol

from src.catalog.models import AnimeData, CharacterData
from src.intent.schema import (
    AnimeSearch,
    CharacterSearch,
    General,
    GenreSearch,
    Intent,
    RandomAnime,
    TopAnime,
)

SearchResult = list[AnimeData] | list[CharacterData] | AnimeData | None


class Catalog(Protocol):
    """The catalog operations the chat needs (implemented by `JikanClient`)."""

    async def search_anime(self, query: str, *, limit: int = 10) -> list[AnimeData]: ...

    async def search_characters(self, query: str, *, limit: int = 5) -> list[CharacterData]: ...

    async def get_anime_details(self, mal_id: int) -> AnimeData | None: ...

    async def get_top_anime(self, *, limit: int = 10) -> list[AnimeData]: ...

    async def get_random_anime(self) -> AnimeData | None: ...

    async def search_anime_by_genre(self, genre: str, *, limit: int = 10) -> list[AnimeData]: ...


async def search(catalog: Catalog, intent: Intent) -> SearchResult:
    """Run the catalog lookup selected by the intent.

    Returns a list of records for every intent except `RandomAnime`, which yields a single record
    (or `None`).
    """

    if isinstance(intent, (AnimeSearch, General)):
        return await catalog.search_anime(intent.query)
    if isinstance(intent, CharacterSearch):
        return await catalog.search_characters(intent.query)
    if isinstance(intent, GenreSearch):
        return await catalog.search_anime_by_genre(intent.genre)
    if isinstance(intent, TopAnime):
        return await catalog.get_top_anime()
    if isinstance(intent, RandomAnime):
        return await catalog.get_random_anime()
    raise TypeError(f"unsupported intent: {intent!r}")
