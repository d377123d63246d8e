"""Tests for the Jikan client (HTTP faked with `httpx.MockTransport`)."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from src.catalog.client import (
    CatalogConnectionError,
    CatalogDecodeError,
    CatalogHTTPError,
    JikanClient,
    RateLimitedError,
)
from src.intent.schema import Genre
from tests.factories import anime_payload

API_BASE = "https://api.jikan.moe/v4"


def _client(handler: Callable[[httpx.Request], httpx.Response], requests: list[httpx.Request]) -> JikanClient:
    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return JikanClient(API_BASE, http_client=http_client)


@pytest.mark.asyncio
async def test_search_anime_sends_query_and_decodes_results() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda _r: httpx.Response(
            200,
            json={
                "data": [anime_payload(20, "Naruto", score=8.0, unknown_field="ignored")],
                "pagination": {"has_next_page": False, "items": {"count": 1, "total": 1, "per_page": 10}},
            },
        ),
        requests,
    )

    results = await client.search_anime("Naruto")

    assert [a.title for a in results] == ["Naruto"]
    assert results[0].score == 8.0
    assert requests[0].url.path == "/v4/anime"
    assert requests[0].url.params["q"] == "Naruto"
    assert requests[0].url.params["limit"] == "10"


@pytest.mark.asyncio
async def test_search_characters_uses_limit_five() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda _r: httpx.Response(200, json={"data": [{"mal_id": 40, "name": "Monkey D. Luffy", "nicknames": None}]}),
        requests,
    )

    results = await client.search_characters("Luffy")

    assert results[0].name == "Monkey D. Luffy"
    assert requests[0].url.path == "/v4/characters"
    assert requests[0].url.params["limit"] == "5"


@pytest.mark.asyncio
async def test_missing_data_list_decodes_as_empty() -> None:
    client = _client(lambda _r: httpx.Response(200, json={"data": None}), [])
    assert await client.get_top_anime() == []


@pytest.mark.asyncio
async def test_top_random_and_details_endpoints() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v4/top/anime":
            return httpx.Response(200, json={"data": [anime_payload(5114, "Fullmetal Alchemist: Brotherhood")]})
        return httpx.Response(200, json={"data": anime_payload(1, "Cowboy Bebop")})

    client = _client(handler, requests)

    top = await client.get_top_anime()
    random_anime = await client.get_random_anime()
    details = await client.get_anime_details(1)

    assert top[0].mal_id == 5114
    assert random_anime is not None and random_anime.title == "Cowboy Bebop"
    assert details is not None and details.mal_id == 1
    assert [r.url.path for r in requests] == ["/v4/top/anime", "/v4/random/anime", "/v4/anime/1"]


@pytest.mark.asyncio
async def test_random_without_data_returns_none() -> None:
    client = _client(lambda _r: httpx.Response(200, json={}), [])
    assert await client.get_random_anime() is None


@pytest.mark.asyncio
async def test_genre_search_uses_mal_genre_id() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _r: httpx.Response(200, json={"data": []}), requests)

    await client.search_anime_by_genre(Genre.sci_fi)
    await client.search_anime_by_genre("Thriller")

    assert requests[0].url.params["genres"] == "24"
    assert requests[1].url.params["genres"] == "41"
    assert "q" not in requests[0].url.params


@pytest.mark.asyncio
async def test_unknown_genre_falls_back_to_title_search() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _r: httpx.Response(200, json={"data": []}), requests)

    await client.search_anime_by_genre("isekai")

    assert requests[0].url.params["q"] == "isekai"
    assert "genres" not in requests[0].url.params


@pytest.mark.asyncio
async def test_rate_limit_is_reported() -> None:
    client = _client(lambda _r: httpx.Response(429), [])
    with pytest.raises(RateLimitedError) as exc_info:
        await client.search_anime("Naruto")
    assert str(exc_info.value) == "Rate limit exceeded. Please try again later."


@pytest.mark.asyncio
async def test_other_http_errors_carry_status_code() -> None:
    client = _client(lambda _r: httpx.Response(503), [])
    with pytest.raises(CatalogHTTPError) as exc_info:
        await client.get_top_anime()
    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "HTTP Error: 503"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>maintenance</html>"),
        httpx.Response(200, json={"data": [{"title": "no id"}]}),
    ],
)
async def test_undecodable_body_raises_decode_error(response: httpx.Response) -> None:
    client = _client(lambda _r: response, [])
    with pytest.raises(CatalogDecodeError):
        await client.search_anime("Naruto")


@pytest.mark.asyncio
async def test_transport_failure_raises_connection_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler, [])
    with pytest.raises(CatalogConnectionError):
        await client.search_anime("Naruto")


@pytest.mark.asyncio
async def test_injected_http_client_is_not_closed() -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda _r: httpx.Response(200, json={})))
    async with JikanClient(API_BASE, http_client=http_client):
        pass
    assert not http_client.is_closed
    await http_client.aclose()
