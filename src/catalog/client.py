"""Async Jikan API client.

The client only performs read-only GET requests and returns validated Pydantic models. Transport,
HTTP status and decoding problems are reported as `CatalogError` subclasses; callers decide how to
present them to the user.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.catalog.models import (
    AnimeData,
    AnimeListResponse,
    CharacterData,
    CharacterListResponse,
    SingleAnimeResponse,
)
from src.intent.schema import Genre

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.jikan.moe/v4"

# MyAnimeList genre ids.
GENRE_IDS: dict[Genre, int] = {
    Genre.action: 1,
    Genre.adventure: 2,
    Genre.comedy: 4,
    Genre.drama: 8,
    Genre.fantasy: 10,
    Genre.horror: 14,
    Genre.mystery: 7,
    Genre.romance: 22,
    Genre.sci_fi: 24,
    Genre.thriller: 41,
}

_ResponseT = TypeVar("_ResponseT", bound=BaseModel)


class CatalogError(RuntimeError):
    """Base class for catalog lookup failures."""


class CatalogConnectionError(CatalogError):
    """Raised when the API cannot be reached."""


class RateLimitedError(CatalogError):
    """Raised on HTTP 429 from the API."""

    def __init__(self) -> None:
        super().__init__("Rate limit exceeded. Please try again later.")


class CatalogHTTPError(CatalogError):
    """Raised on any other non-200 HTTP status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP Error: {status_code}")
        self.status_code = status_code


class CatalogDecodeError(CatalogError):
    """Raised when the response body does not match the expected schema."""

    def __init__(self) -> None:
        super().__init__("Failed to decode response")


class JikanClient:
    """Thin async wrapper over the Jikan v4 REST endpoints used by the chat."""

    def __init__(
            self,
            api_base: str = DEFAULT_API_BASE,
            *,
            timeout_s: float = 15.0,
            http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_s))

    async def __aenter__(self) -> JikanClient:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""

        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, response_model: type[_ResponseT], params: dict[str, Any] | None = None) -> _ResponseT:
        url = f"{self.api_base}{path}"
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise CatalogConnectionError(f"Connection error: {exc.__class__.__name__}") from exc

        if response.status_code == 429:
            raise RateLimitedError()
        if response.status_code != 200:
            raise CatalogHTTPError(response.status_code)

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("decode failed path=%s errors=%d", path, exc.error_count())
            raise CatalogDecodeError() from exc

    async def search_anime(self, query: str, *, limit: int = 10) -> list[AnimeData]:
        result = await self._get("/anime", AnimeListResponse, {"q": query, "limit": limit})
        return list(result.data or [])

    async def search_characters(self, query: str, *, limit: int = 5) -> list[CharacterData]:
        result = await self._get("/characters", CharacterListResponse, {"q": query, "limit": limit})
        return list(result.data or [])

    async def get_anime_details(self, mal_id: int) -> AnimeData | None:
        result = await self._get(f"/anime/{int(mal_id)}", SingleAnimeResponse)
        return result.data

    async def get_top_anime(self, *, limit: int = 10) -> list[AnimeData]:
        result = await self._get("/top/anime", AnimeListResponse, {"limit": limit})
        return list(result.data or [])

    async def get_random_anime(self) -> AnimeData | None:
        result = await self._get("/random/anime", SingleAnimeResponse)
        return result.data

    async def search_anime_by_genre(self, genre: Genre | str, *, limit: int = 10) -> list[AnimeData]:
        """List anime of a genre; unknown genre names fall back to a title search."""

        try:
            genre_id = GENRE_IDS[Genre(str(genre).lower())]
        except ValueError:
            return await self.search_anime(str(genre), limit=limit)

        result = await self._get("/anime", AnimeListResponse, {"genres": genre_id, "limit": limit})
        return list(result.data or [])
