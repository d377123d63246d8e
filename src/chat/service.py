"""Chat turn orchestration.

A turn is: record the user's message, remember it as a recent search, classify it, run the
matching catalog lookup and append the assistant replies to the sink. Collaborators (catalog,
recent-search storage, message sink) are injected; nothing here keeps global state.
"""

from __future__ import annotations

import logging
from typing import Protocol

from src.catalog.client import CatalogError
from src.catalog.models import AnimeData, CharacterData
from src.catalog.search import Catalog, search
from src.chat.models import ChatMessage
from src.intent.rules_parser import classify
from src.intent.schema import CharacterSearch, GenreSearch, Intent, RandomAnime, TopAnime
from src.store.repositories import RecentSearchRepository

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Hello! I'm your anime assistant. Ask me about any anime, character, or get recommendations!\n"
    "\n"
    "Try saying:\n"
    "• \"Tell me about Naruto\"\n"
    "• \"Find anime with Luffy\"\n"
    "• \"Show me action anime\"\n"
    "• \"Random anime please\""
)

# How many anime records are shown for a multi-result answer.
MAX_SHOWN_RESULTS = 3


class MessageSink(Protocol):
    def append(self, message: ChatMessage) -> None: ...


def _query_label(intent: Intent) -> str:
    if isinstance(intent, GenreSearch):
        return f"anime in {intent.genre} genre"
    if isinstance(intent, TopAnime):
        return "top anime"
    return getattr(intent, "query", "")


def render_anime_results(results: list[AnimeData], query: str) -> list[ChatMessage]:
    """Turn an anime result list into assistant messages."""

    if not results:
        return [
            ChatMessage(
                text=f"Sorry, I couldn't find any anime matching '{query}'. Try a different search term!",
            )
        ]

    if len(results) == 1:
        return [ChatMessage(text=f"Here's what I found for '{query}':", anime=results[0])]

    messages = [
        ChatMessage(
            text=f"I found {len(results)} anime matching '{query}'. Here's the top result:",
            anime=results[0],
        )
    ]
    messages.extend(ChatMessage(text="", anime=anime) for anime in results[1:MAX_SHOWN_RESULTS])

    if len(results) > MAX_SHOWN_RESULTS:
        messages.append(
            ChatMessage(
                text=(
                    f"And {len(results) - MAX_SHOWN_RESULTS} more results! "
                    "Try being more specific if you're looking for something particular."
                ),
            )
        )
    return messages


def render_character_results(results: list[CharacterData], query: str) -> list[ChatMessage]:
    """Describe the best matching character, if any."""

    if not results:
        return [
            ChatMessage(
                text=(
                    f"Sorry, I couldn't find any characters matching '{query}'. "
                    "Try a different search term!"
                ),
            )
        ]

    character = results[0]
    text = (
        f"I found the character '{character.name}'!\n"
        "\n"
        f"{character.about or 'No description available.'}\n"
        "\n"
        f"This character has {character.favorites or 0} favorites on MyAnimeList."
    )
    return [ChatMessage(text=text)]


def render_random_result(anime: AnimeData | None) -> list[ChatMessage]:
    if anime is None:
        return [ChatMessage(text="Sorry, I couldn't get a random anime right now. Please try again.")]
    return [ChatMessage(text="Here's a random anime for you!", anime=anime)]


class ChatService:
    """Runs chat turns against injected collaborators."""

    def __init__(self, catalog: Catalog, recent_searches: RecentSearchRepository) -> None:
        self.catalog = catalog
        self.recent_searches = recent_searches

    @staticmethod
    def welcome_message() -> ChatMessage:
        return ChatMessage(text=WELCOME_TEXT)

    async def process_user_message(self, user_id: int, text: str, sink: MessageSink) -> Intent:
        """Handle one user message and append all replies to `sink`.

        Returns the classified intent (mostly useful for logging).
        """

        sink.append(ChatMessage(text=text, is_from_assistant=False))
        await self.recent_searches.add(user_id, text)

        intent = classify(text)
        await self.reply_to_intent(intent, sink)
        return intent

    async def reply_to_intent(self, intent: Intent, sink: MessageSink) -> None:
        """Run the catalog lookup for an intent and append the rendered replies.

        Catalog failures become an apology message; other errors propagate.
        """

        try:
            result = await search(self.catalog, intent)
        except CatalogError as exc:
            logger.info("catalog failed kind=%s reason=%s", intent.kind, exc)
            sink.append(ChatMessage(text=f"Sorry, I encountered an error: {exc}. Please try again."))
            return

        if isinstance(intent, RandomAnime):
            replies = render_random_result(result if isinstance(result, AnimeData) else None)
        elif isinstance(intent, CharacterSearch):
            replies = render_character_results(list(result or []), intent.query)
        else:
            replies = render_anime_results(list(result or []), _query_label(intent))

        for reply in replies:
            sink.append(reply)

    async def repeat_search(self, user_id: int, search_id: int, sink: MessageSink) -> bool:
        """Re-run the stored search `search_id` as a new turn.

        The repeat is recorded as a new search; the original entry keeps its id, so the same
        button repeats the same query. Returns False once the search is no longer stored.
        """

        stored = await self.recent_searches.get(user_id, search_id)
        if stored is None:
            return False
        await self.process_user_message(user_id, stored.query, sink)
        return True
