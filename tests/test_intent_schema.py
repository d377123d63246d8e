"""Tests for the Intent Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.intent.schema import (
    AnimeSearch,
    General,
    Genre,
    GenreSearch,
    IntentKind,
    RandomAnime,
    TopAnime,
    intent_from_obj,
)


def test_genre_declaration_order() -> None:
    assert [g.value for g in Genre] == [
        "action",
        "adventure",
        "comedy",
        "drama",
        "fantasy",
        "horror",
        "mystery",
        "romance",
        "sci-fi",
        "thriller",
    ]


def test_intent_from_obj_uses_kind_discriminator() -> None:
    assert intent_from_obj({"kind": "genre_search", "genre": "sci-fi"}) == GenreSearch(genre=Genre.sci_fi)
    assert intent_from_obj({"kind": "anime_search", "query": "Naruto"}) == AnimeSearch(query="Naruto")
    assert intent_from_obj({"kind": "top_anime"}) == TopAnime()


def test_intent_from_obj_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        intent_from_obj({"kind": "weather", "query": "tomorrow"})


def test_genre_search_rejects_unknown_genre() -> None:
    with pytest.raises(ValidationError):
        GenreSearch(genre="isekai")  # type: ignore[arg-type]


def test_payloadless_intents_forbid_extra_fields() -> None:
    with pytest.raises(ValidationError):
        RandomAnime(query="x")  # type: ignore[call-arg]


def test_kind_matches_intent_kind_enum() -> None:
    assert General().kind == IntentKind.general
    assert RandomAnime().kind == IntentKind.random_anime
    assert General().query == ""
