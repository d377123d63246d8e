"""Tests for intent-to-catalog dispatch."""

from __future__ import annotations

import pytest

from src.catalog.search import search
from src.intent.schema import (
    AnimeSearch,
    CharacterSearch,
    General,
    Genre,
    GenreSearch,
    RandomAnime,
    TopAnime,
)
from tests.factories import make_anime
from tests.fakes import FakeCatalog


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("intent", "expected_call"),
    [
        (AnimeSearch(query="Naruto"), ("search_anime", "Naruto")),
        (General(query="Cowboy Bebop"), ("search_anime", "Cowboy Bebop")),
        (CharacterSearch(query="Luffy"), ("search_characters", "Luffy")),
        (GenreSearch(genre=Genre.horror), ("search_anime_by_genre", Genre.horror)),
        (TopAnime(), ("get_top_anime", None)),
        (RandomAnime(), ("get_random_anime", None)),
    ],
)
async def test_search_dispatches_by_intent(intent: object, expected_call: tuple[str, object]) -> None:
    catalog = FakeCatalog()
    await search(catalog, intent)  # type: ignore[arg-type]
    assert catalog.calls == [expected_call]


@pytest.mark.asyncio
async def test_random_returns_single_record() -> None:
    anime = make_anime()
    result = await search(FakeCatalog(random_anime=anime), RandomAnime())
    assert result == anime


@pytest.mark.asyncio
async def test_unsupported_intent_is_rejected() -> None:
    with pytest.raises(TypeError):
        await search(FakeCatalog(), object())  # type: ignore[arg-type]
