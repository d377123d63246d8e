"""Bot router composition.

Command handlers are registered before the catch-all text handler; aiogram stops at the first
matching handler.
"""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart

from src.bot.formatting import FAVORITE_CALLBACK_PREFIX, RECENT_CALLBACK_PREFIX
from src.bot.handlers import (
    handle_clear_favorites,
    handle_clear_recent,
    handle_favorite_callback,
    handle_favorites,
    handle_message,
    handle_random,
    handle_recent,
    handle_recent_callback,
    handle_settings,
    handle_start,
    handle_theme,
    handle_top,
)

router = Router(name="root")

router.message.register(handle_start, CommandStart())
router.message.register(handle_start, Command("help"))
router.message.register(handle_random, Command("random"))
router.message.register(handle_top, Command("top"))
router.message.register(handle_favorites, Command("favorites"))
router.message.register(handle_clear_favorites, Command("clear_favorites"))
router.message.register(handle_recent, Command("recent"))
router.message.register(handle_clear_recent, Command("clear_recent"))
router.message.register(handle_theme, Command("theme"))
router.message.register(handle_settings, Command("settings"))
router.message.register(handle_message)

router.callback_query.register(handle_favorite_callback, F.data.startswith(FAVORITE_CALLBACK_PREFIX))
router.callback_query.register(handle_recent_callback, F.data.startswith(RECENT_CALLBACK_PREFIX))
