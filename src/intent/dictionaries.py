"""English trigger and filler phrase dictionaries.

These tuples drive the rules-based classifier and should remain small and deterministic. All
trigger phrases are lower-case because they are matched against lower-cased text.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.intent.schema import Genre

RANDOM_TRIGGERS: tuple[str, ...] = ("random", "surprise")

TOP_TRIGGERS: tuple[str, ...] = ("top", "best", "highest rated")

CHARACTER_TRIGGERS: tuple[str, ...] = ("character", "find anime with", "who is")

# "tell me about" is stripped from character queries even though it does not trigger them.
CHARACTER_FILLER: tuple[str, ...] = ("character", "find anime with", "who is", "tell me about")

ANIME_TRIGGERS: tuple[str, ...] = ("anime", "series", "show")

ANIME_FILLER: tuple[str, ...] = ("tell me about", "what is", "find", "show me", "search for")

GENRES: tuple[Genre, ...] = tuple(Genre)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """Whether any phrase occurs in text as a plain substring."""

    return any(phrase in text for phrase in phrases)


def find_genre(text: str) -> Genre | None:
    """Return the earliest-declared genre contained in the (lower-cased) text.

    Substring containment is used, so "dramatic" matches `Genre.drama`.
    """

    for genre in GENRES:
        if genre.value in text:
            return genre
    return None
