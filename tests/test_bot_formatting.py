"""Tests for Telegram plain-text rendering."""

from __future__ import annotations

from datetime import UTC, datetime

from src.bot.formatting import (
    FAVORITE_CALLBACK_PREFIX,
    SYNOPSIS_MAX_CHARS,
    favorite_keyboard,
    format_anime_card,
    format_chat_message,
    format_favorites,
    format_recent_searches,
    format_settings,
    parse_callback_int,
    recent_searches_keyboard,
)
from src.chat.models import ChatMessage
from src.store.repositories import RecentSearch
from tests.factories import make_anime


def test_anime_card_lists_key_facts() -> None:
    anime = make_anime(
        1,
        "Cowboy Bebop",
        title_english="Cowboy Bebop",
        score=8.75,
        type="TV",
        episodes=26,
        year=1998,
        genres=[{"mal_id": 1, "type": "anime", "name": "Action", "url": "u"}],
        synopsis="Crime is timeless.",
        status="Finished Airing",
        duration="24 min per ep",
        studios=[{"mal_id": 14, "type": "anime", "name": "Sunrise", "url": "u"}],
    )

    card = format_anime_card(anime)

    assert card.splitlines()[0] == "Cowboy Bebop"
    assert "★ 8.8 · TV · 26 episodes · 1998" in card
    assert "Status: Finished Airing" in card
    assert "Duration: 24 min per ep" in card
    assert "Studios: Sunrise" in card
    assert "Genres: Action" in card
    assert "Crime is timeless." in card
    assert card.endswith("https://myanimelist.net/anime/1")
    # English title identical to the main title is not repeated.
    assert card.count("Cowboy Bebop") == 1


def test_long_synopsis_is_truncated() -> None:
    card = format_anime_card(make_anime(synopsis="x" * 1000, url=None))
    assert card.endswith("…")
    assert len(card.splitlines()[-1]) == SYNOPSIS_MAX_CHARS


def test_chat_message_combines_text_and_card() -> None:
    anime = make_anime(title="Trigun")
    assert format_chat_message(ChatMessage(text="Hi")) == "Hi"
    assert format_chat_message(ChatMessage(text="", anime=anime)).startswith("Trigun")
    assert format_chat_message(ChatMessage(text="Found:", anime=anime)).startswith("Found:\n\nTrigun")
    assert format_chat_message(ChatMessage(text="")) == ""


def test_favorite_keyboard_callback_data() -> None:
    markup = favorite_keyboard(make_anime(42), is_favorite=True)
    button = markup.inline_keyboard[0][0]
    assert button.callback_data == f"{FAVORITE_CALLBACK_PREFIX}42"
    assert "Favorited" in button.text


def test_parse_callback_int() -> None:
    assert parse_callback_int("fav:42", "fav:") == 42
    assert parse_callback_int("fav:x", "fav:") is None
    assert parse_callback_int("recent:1", "fav:") is None
    assert parse_callback_int(None, "fav:") is None


def test_empty_lists_have_hints() -> None:
    assert format_favorites([]).startswith("No Favorites Yet")
    assert format_recent_searches([]).startswith("No Recent Searches")
    assert recent_searches_keyboard([]) is None


def test_favorites_list() -> None:
    text = format_favorites([make_anime(1, "Trigun", score=8.2, type="TV"), make_anime(2, "Akira")])
    assert "1. Trigun (★ 8.2, TV)" in text
    assert "2. Akira" in text


def test_recent_searches_list_and_keyboard() -> None:
    searches = [
        RecentSearch(search_id=42, query="who is Levi", timestamp=datetime(2025, 1, 2, 3, 4, tzinfo=UTC))
    ]
    assert "1. who is Levi (2025-01-02 03:04 UTC)" in format_recent_searches(searches)
    markup = recent_searches_keyboard(searches)
    assert markup is not None
    assert markup.inline_keyboard[0][0].callback_data == "recent:42"


def test_settings_text() -> None:
    text = format_settings(dark_mode=True, favorites_count=3)
    assert "Dark Mode: on" in text
    assert "3 anime saved" in text
