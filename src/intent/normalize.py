"""Text helpers for deterministic intent classification."""

from __future__ import annotations

import re
from collections.abc import Iterable


def normalize_text(text: str) -> str:
    """Lower-case user text for matching purposes.

    Matching is plain substring containment, so nothing else is normalized: punctuation and
    whitespace are kept exactly as typed.
    """

    return (text or "").lower()


def strip_phrases(text: str, phrases: Iterable[str]) -> str:
    """Remove every occurrence of each phrase (case-insensitive), then trim whitespace.

    Phrases are removed one after another in the given order; the original casing of the remaining
    text is preserved.
    """

    value = text or ""
    for phrase in phrases:
        value = re.sub(re.escape(phrase), "", value, flags=re.IGNORECASE)
    return value.strip()
