"""Rules-based chat intent classifier.

This classifier is intentionally simple and deterministic:
    - it matches lower-cased substrings, not whole words,
    - rules are evaluated in a fixed priority order and the first match wins,
    - it never fails: text that matches nothing specific becomes a `General` intent.

The priority order lives in `RULES` so it can be inspected and tested directly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from src.intent.dictionaries import (
    ANIME_FILLER,
    ANIME_TRIGGERS,
    CHARACTER_FILLER,
    CHARACTER_TRIGGERS,
    RANDOM_TRIGGERS,
    TOP_TRIGGERS,
    contains_any,
    find_genre,
)
from src.intent.normalize import normalize_text, strip_phrases
from src.intent.schema import (
    AnimeSearch,
    CharacterSearch,
    General,
    GenreSearch,
    Intent,
    RandomAnime,
    TopAnime,
)


@dataclass(frozen=True)
class Rule:
    """One step of the classification cascade.

    `predicate` sees the lower-cased text; `handler` gets both the original and the lower-cased
    text, because query extraction keeps the user's casing.
    """

    name: str
    predicate: Callable[[str], bool]
    handler: Callable[[str, str], Intent]


def _build_genre_search(text: str, lowered: str) -> Intent:
    genre = find_genre(lowered)
    if genre is None:
        # Only reachable if the handler is called without its predicate.
        return General(query=strip_phrases(text, ANIME_FILLER))
    return GenreSearch(genre=genre)


RULES: tuple[Rule, ...] = (
    Rule(
        name="random_anime",
        predicate=lambda lowered: contains_any(lowered, RANDOM_TRIGGERS),
        handler=lambda _text, _lowered: RandomAnime(),
    ),
    Rule(
        name="top_anime",
        predicate=lambda lowered: contains_any(lowered, TOP_TRIGGERS),
        handler=lambda _text, _lowered: TopAnime(),
    ),
    Rule(
        name="character_search",
        predicate=lambda lowered: contains_any(lowered, CHARACTER_TRIGGERS),
        handler=lambda text, _lowered: CharacterSearch(query=strip_phrases(text, CHARACTER_FILLER)),
    ),
    Rule(
        name="genre_search",
        predicate=lambda lowered: find_genre(lowered) is not None,
        handler=_build_genre_search,
    ),
    Rule(
        name="anime_search",
        predicate=lambda lowered: contains_any(lowered, ANIME_TRIGGERS),
        handler=lambda text, _lowered: AnimeSearch(query=strip_phrases(text, ANIME_FILLER)),
    ),
    Rule(
        name="general",
        predicate=lambda _lowered: True,
        handler=lambda text, _lowered: General(query=strip_phrases(text, ANIME_FILLER)),
    ),
)


def rule_names() -> list[str]:
    """Return rule names in evaluation (priority) order."""

    return [rule.name for rule in RULES]


def match_rule(text: str) -> Rule:
    """Return the first rule whose predicate accepts the text."""

    lowered = normalize_text(text)
    for rule in RULES:
        if rule.predicate(lowered):
            return rule
    # The last rule accepts everything.
    return RULES[-1]


def classify(text: str) -> Intent:
    """Classify chat text into exactly one Intent.

    The function is total over strings: empty input yields `General(query="")`.
    """

    value = text or ""
    rule = match_rule(value)
    return rule.handler(value, normalize_text(value))
