"""Synchronous Postgres connections for scripts (migrations, integration test setup)."""

from __future__ import annotations

import os

import psycopg
from dotenv import load_dotenv


def resolve_database_url(database_url: str | None = None) -> str:
    """Return the explicit URL, or `DATABASE_URL` from the environment / `.env`.

    Raises:
        RuntimeError: If no URL is configured.
    """

    if database_url:
        return database_url

    load_dotenv(".env")
    value = os.getenv("DATABASE_URL")
    if not value:
        raise RuntimeError("DATABASE_URL is required for Postgres storage (set it in .env or environment)")
    return value


def connect_utc(database_url: str) -> psycopg.Connection:
    """Open a blocking connection with the session timezone locked to UTC."""

    conn = psycopg.connect(database_url)
    conn.execute("SET TIME ZONE 'UTC'", prepare=False)
    return conn
