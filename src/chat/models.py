"""Chat message models and the in-order message sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.catalog.models import AnimeData


@dataclass(frozen=True)
class ChatMessage:
    """One chat bubble. Assistant messages may carry an anime record to render as a card."""

    text: str
    is_from_assistant: bool = True
    anime: AnimeData | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class ChatHistory:
    """Append-only message sink, kept in arrival order."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def assistant_messages(self) -> list[ChatMessage]:
        return [m for m in self._messages if m.is_from_assistant]

    def __len__(self) -> int:
        return len(self._messages)
