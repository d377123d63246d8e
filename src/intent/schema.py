"""Intent schema (Pydantic models).

This schema is the contract between the rules-based classifier and the catalog search dispatch.
Every intent variant is immutable and carries a `kind` discriminator so intents can also be
validated from decoded JSON.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class IntentKind(StrEnum):
    """Supported search intent families (the values of each model's `kind` field)."""

    anime_search = "anime_search"
    character_search = "character_search"
    genre_search = "genre_search"
    top_anime = "top_anime"
    random_anime = "random_anime"
    general = "general"


class Genre(StrEnum):
    """Known genre keywords.

    Declaration order is significant: when several genres occur in a message, the earliest-declared
    one wins.
    """

    action = "action"
    adventure = "adventure"
    comedy = "comedy"
    drama = "drama"
    fantasy = "fantasy"
    horror = "horror"
    mystery = "mystery"
    romance = "romance"
    sci_fi = "sci-fi"
    thriller = "thriller"


class _IntentBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class AnimeSearch(_IntentBase):
    """Look up anime titles by free-text query."""

    kind: Literal["anime_search"] = "anime_search"
    query: str = ""


class CharacterSearch(_IntentBase):
    """Look up characters by name."""

    kind: Literal["character_search"] = "character_search"
    query: str = ""


class GenreSearch(_IntentBase):
    """List anime of one genre."""

    kind: Literal["genre_search"] = "genre_search"
    genre: Genre


class TopAnime(_IntentBase):
    kind: Literal["top_anime"] = "top_anime"


class RandomAnime(_IntentBase):
    kind: Literal["random_anime"] = "random_anime"


class General(_IntentBase):
    """Fallback when no specific trigger matched; searched like a title query."""

    kind: Literal["general"] = "general"
    query: str = ""


Intent = Annotated[
    AnimeSearch | CharacterSearch | GenreSearch | TopAnime | RandomAnime | General,
    Field(discriminator="kind"),
]

_INTENT_ADAPTER: TypeAdapter[Intent] = TypeAdapter(Intent)


def intent_from_obj(obj: Any) -> Intent:
    """Validate and parse an Intent from an arbitrary decoded JSON object."""

    return _INTENT_ADAPTER.validate_python(obj)
