"""Tests for environment settings validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config.settings import Settings, load_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's real `.env` out of the way.
    monkeypatch.chdir(tmp_path)
    for name in ("DATABASE_URL", "DB_TIMEZONE", "JIKAN_API_BASE", "JIKAN_TIMEOUT_S", "RECENT_SEARCHES_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")


def test_defaults() -> None:
    settings = Settings()
    assert settings.database_url is None
    assert settings.jikan_api_base == "https://api.jikan.moe/v4"
    assert settings.recent_searches_limit == 20


def test_blank_database_url_means_memory_storage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "  ")
    assert Settings().database_url is None


def test_api_base_trailing_slash_is_dropped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JIKAN_API_BASE", "http://localhost:8080/v4/")
    assert Settings().jikan_api_base == "http://localhost:8080/v4"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DB_TIMEZONE", "Europe/Moscow"),
        ("JIKAN_API_BASE", "ftp://example.org"),
        ("JIKAN_TIMEOUT_S", "0"),
        ("RECENT_SEARCHES_LIMIT", "0"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError, match="Invalid environment configuration"):
        load_settings()


def test_token_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN")
    with pytest.raises(RuntimeError):
        load_settings()
