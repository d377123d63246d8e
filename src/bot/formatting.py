"""Plain-text rendering of chat replies for Telegram.

Messages are sent with `parse_mode=None`, so nothing here needs escaping.
"""

from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from src.catalog.models import AnimeData
from src.chat.models import ChatMessage
from src.store.repositories import RecentSearch

SYNOPSIS_MAX_CHARS = 400
# Telegram's hard limit for a text message.
MESSAGE_MAX_CHARS = 4096

FAVORITE_CALLBACK_PREFIX = "fav:"
RECENT_CALLBACK_PREFIX = "recent:"


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def format_anime_card(anime: AnimeData) -> str:
    """Render the key facts of an anime as a compact text card."""

    lines = [anime.title]
    if anime.title_english and anime.title_english != anime.title:
        lines.append(anime.title_english)

    facts: list[str] = []
    if anime.score is not None:
        facts.append(f"★ {anime.score:.1f}")
    if anime.type:
        facts.append(anime.type)
    if anime.episodes:
        facts.append(f"{anime.episodes} episodes")
    if anime.year:
        facts.append(str(anime.year))
    if facts:
        lines.append(" · ".join(facts))

    if anime.status:
        lines.append(f"Status: {anime.status}")
    if anime.duration:
        lines.append(f"Duration: {anime.duration}")
    if anime.studios:
        lines.append("Studios: " + ", ".join(s.name for s in anime.studios))
    if anime.genres:
        lines.append("Genres: " + ", ".join(g.name for g in anime.genres))

    if anime.synopsis:
        lines.append("")
        lines.append(_truncate(anime.synopsis.strip(), SYNOPSIS_MAX_CHARS))

    if anime.url:
        lines.append("")
        lines.append(anime.url)
    return "\n".join(lines)


def format_chat_message(message: ChatMessage) -> str:
    """Combine the reply text and the attached anime card (if any)."""

    parts = [p for p in (message.text, format_anime_card(message.anime) if message.anime else "") if p]
    return _truncate("\n\n".join(parts), MESSAGE_MAX_CHARS)


def favorite_keyboard(anime: AnimeData, *, is_favorite: bool) -> InlineKeyboardMarkup:
    label = "♥ Favorited" if is_favorite else "♡ Favorite"
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text=label, callback_data=f"{FAVORITE_CALLBACK_PREFIX}{anime.mal_id}")]
        ]
    )


def parse_callback_int(data: str | None, prefix: str) -> int | None:
    """Extract the integer payload of `<prefix><int>` callback data."""

    if not data or not data.startswith(prefix):
        return None
    payload = data[len(prefix):]
    if not payload.isdigit():
        return None
    return int(payload)


def format_favorites(favorites: list[AnimeData]) -> str:
    if not favorites:
        return (
            "No Favorites Yet\n"
            "Add anime to your favorites by tapping the heart button under any result."
        )

    lines = [f"Your favorites ({len(favorites)}):"]
    for idx, anime in enumerate(favorites, start=1):
        details = [d for d in (f"★ {anime.score:.1f}" if anime.score is not None else "", anime.type or "") if d]
        suffix = f" ({', '.join(details)})" if details else ""
        lines.append(f"{idx}. {anime.title}{suffix}")
    return _truncate("\n".join(lines), MESSAGE_MAX_CHARS)


def format_recent_searches(searches: list[RecentSearch]) -> str:
    if not searches:
        return (
            "No Recent Searches\n"
            "Your search history will appear here after you start chatting about anime."
        )

    lines = ["Recent searches (tap to repeat):"]
    for idx, search in enumerate(searches, start=1):
        lines.append(f"{idx}. {search.query} ({search.timestamp:%Y-%m-%d %H:%M} UTC)")
    return _truncate("\n".join(lines), MESSAGE_MAX_CHARS)


def recent_searches_keyboard(searches: list[RecentSearch]) -> InlineKeyboardMarkup | None:
    if not searches:
        return None
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text=_truncate(search.query, 40) or "(empty)",
                    callback_data=f"{RECENT_CALLBACK_PREFIX}{search.search_id}",
                )
            ]
            for search in searches
        ]
    )


def format_settings(*, dark_mode: bool, favorites_count: int) -> str:
    return "\n".join(
        [
            "Settings",
            f"Dark Mode: {'on' if dark_mode else 'off'} (/theme to toggle)",
            f"Favorites: {favorites_count} anime saved",
            "",
            "Powered by Jikan API (unofficial MyAnimeList API)",
        ]
    )
