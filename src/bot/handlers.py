"""aiogram message and callback handlers.

Handler boundary contract: every user message gets at least one reply. Catalog failures are
already turned into apology messages by the chat service; anything unexpected is logged here and
answered with a generic apology, never with error details.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from time import monotonic

from aiogram.types import CallbackQuery, Message

from src.app import App
from src.bot.formatting import (
    FAVORITE_CALLBACK_PREFIX,
    RECENT_CALLBACK_PREFIX,
    favorite_keyboard,
    format_chat_message,
    format_favorites,
    format_recent_searches,
    format_settings,
    parse_callback_int,
    recent_searches_keyboard,
)
from src.catalog.client import CatalogError
from src.chat.models import ChatHistory, ChatMessage
from src.intent.schema import RandomAnime, TopAnime

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, something went wrong. Please try again."


def _user_id(message: Message) -> int:
    if message.from_user is not None:
        return message.from_user.id
    return message.chat.id


@asynccontextmanager
async def _reply_on_error(target: Message | CallbackQuery, action: str) -> AsyncIterator[None]:
    """Log an unexpected error raised in the block and answer `target` with the generic apology."""

    # noinspection PyBroadException
    try:
        yield
    except Exception:
        logger.exception("%s failed", action)
        await target.answer(FALLBACK_REPLY)


async def send_replies(message: Message, replies: list[ChatMessage], app: App, user_id: int) -> int:
    """Send assistant messages in order; anime cards get a favorite toggle button.

    Returns the number of Telegram messages sent.
    """

    sent = 0
    for reply in replies:
        text = format_chat_message(reply)
        if not text:
            continue

        markup = None
        if reply.anime is not None:
            is_favorite = await app.repositories.favorites.is_favorite(user_id, reply.anime.mal_id)
            markup = favorite_keyboard(reply.anime, is_favorite=is_favorite)

        await message.answer(text, reply_markup=markup)
        sent += 1
    return sent


async def handle_start(message: Message, app: App) -> None:
    """Greet the user with example prompts (`/start`, `/help`)."""

    await message.answer(format_chat_message(app.chat.welcome_message()))


async def _answer_intent_command(message: Message, app: App, intent: RandomAnime | TopAnime) -> None:
    history = ChatHistory()
    try:
        await app.chat.reply_to_intent(intent, history)
        await send_replies(message, history.assistant_messages(), app, _user_id(message))
    except Exception:
        logger.exception("command failed kind=%s", intent.kind)
        await message.answer(FALLBACK_REPLY)


async def handle_random(message: Message, app: App) -> None:
    await _answer_intent_command(message, app, RandomAnime())


async def handle_top(message: Message, app: App) -> None:
    await _answer_intent_command(message, app, TopAnime())


async def handle_favorites(message: Message, app: App) -> None:
    async with _reply_on_error(message, "favorites"):
        favorites = await app.repositories.favorites.list(_user_id(message))
        await message.answer(format_favorites(favorites))


async def handle_clear_favorites(message: Message, app: App) -> None:
    async with _reply_on_error(message, "clear_favorites"):
        await app.repositories.favorites.clear(_user_id(message))
        await message.answer("All favorites removed.")


async def handle_recent(message: Message, app: App) -> None:
    async with _reply_on_error(message, "recent"):
        searches = await app.repositories.recent_searches.list(_user_id(message))
        await message.answer(
            format_recent_searches(searches),
            reply_markup=recent_searches_keyboard(searches),
        )


async def handle_clear_recent(message: Message, app: App) -> None:
    async with _reply_on_error(message, "clear_recent"):
        await app.repositories.recent_searches.clear(_user_id(message))
        await message.answer("Recent searches cleared.")


async def handle_theme(message: Message, app: App) -> None:
    async with _reply_on_error(message, "theme"):
        dark_mode = await app.repositories.preferences.toggle_dark_mode(_user_id(message))
        await message.answer(f"Dark Mode is now {'on' if dark_mode else 'off'}.")


async def handle_settings(message: Message, app: App) -> None:
    async with _reply_on_error(message, "settings"):
        user_id = _user_id(message)
        dark_mode = await app.repositories.preferences.is_dark_mode(user_id)
        favorites_count = await app.repositories.favorites.count(user_id)
        await message.answer(format_settings(dark_mode=dark_mode, favorites_count=favorites_count))


async def handle_message(message: Message, app: App) -> None:
    """Handle free-form chat text: classify, search, reply."""

    started = monotonic()
    raw_text = message.text or message.caption or ""
    if not raw_text.strip():
        await handle_start(message, app)
        return
    if raw_text.lstrip().startswith("/"):
        await message.answer("Unknown command. " + format_chat_message(app.chat.welcome_message()))
        return

    user_id = _user_id(message)
    history = ChatHistory()

    # noinspection PyBroadException
    try:
        intent = await app.chat.process_user_message(user_id, raw_text, history)
        sent = await send_replies(message, history.assistant_messages(), app, user_id)

        latency_ms = int((monotonic() - started) * 1000)
        logger.info("handled kind=%s replies=%d latency_ms=%d", intent.kind, sent, latency_ms)
    except Exception:
        logger.exception("handler failed")
        await message.answer(FALLBACK_REPLY)


async def handle_favorite_callback(callback: CallbackQuery, app: App) -> None:
    """Toggle a favorite from the button under an anime card."""

    mal_id = parse_callback_int(callback.data, FAVORITE_CALLBACK_PREFIX)
    if mal_id is None:
        await callback.answer()
        return

    user_id = callback.from_user.id
    favorites = app.repositories.favorites

    async with _reply_on_error(callback, f"favorite toggle mal_id={mal_id}"):
        anime = next((a for a in await favorites.list(user_id) if a.mal_id == mal_id), None)
        if anime is None:
            try:
                anime = await app.catalog.get_anime_details(mal_id)
            except CatalogError as exc:
                logger.info("favorite lookup failed mal_id=%d reason=%s", mal_id, exc)
                await callback.answer(f"Sorry, {exc}")
                return
        if anime is None:
            await callback.answer("Sorry, that anime is no longer available.")
            return

        is_favorite = await favorites.toggle(user_id, anime)
        if isinstance(callback.message, Message):
            await callback.message.edit_reply_markup(
                reply_markup=favorite_keyboard(anime, is_favorite=is_favorite)
            )
        await callback.answer("Added to favorites" if is_favorite else "Removed from favorites")


async def handle_recent_callback(callback: CallbackQuery, app: App) -> None:
    """Repeat a recent search chosen from the `/recent` keyboard."""

    search_id = parse_callback_int(callback.data, RECENT_CALLBACK_PREFIX)
    if search_id is None or not isinstance(callback.message, Message):
        await callback.answer()
        return

    user_id = callback.from_user.id
    history = ChatHistory()
    try:
        found = await app.chat.repeat_search(user_id, search_id, history)
        if not found:
            await callback.answer("That search is no longer in your history.")
            return
        await callback.answer()
        await send_replies(callback.message, history.assistant_messages(), app, user_id)
    except Exception:
        logger.exception("repeat search failed search_id=%d", search_id)
        await callback.message.answer(FALLBACK_REPLY)
