"""Apply SQL migrations for the preference tables.

Migrations are plain `.sql` files under `src/db/migrations/`, applied in lexicographic order.
Applied filenames are tracked in the `schema_migrations` table, so re-running is a no-op.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import LiteralString, cast

import psycopg

from src.config.logging import configure_logging
from src.db.connection import connect_utc, resolve_database_url

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_DROP_ALL = """
DROP TABLE IF EXISTS favorites;
DROP TABLE IF EXISTS recent_searches;
DROP TABLE IF EXISTS user_preferences;
DROP TABLE IF EXISTS schema_migrations;
"""


def list_migration_files() -> list[Path]:
    if not MIGRATIONS_DIR.exists():
        raise RuntimeError(f"Migrations directory does not exist: {MIGRATIONS_DIR}")

    files = sorted(p for p in MIGRATIONS_DIR.iterdir() if p.is_file() and p.suffix == ".sql")
    if not files:
        raise RuntimeError(f"No .sql migration files found in {MIGRATIONS_DIR}")
    return files


def _ensure_schema_migrations(conn: psycopg.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations
        (
            filename   TEXT PRIMARY KEY,
            applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
        """,
        prepare=False,
    )


def _applied_migrations(conn: psycopg.Connection) -> set[str]:
    rows = conn.execute("SELECT filename FROM schema_migrations", prepare=False).fetchall()
    return {r[0] for r in rows}


def apply_migrations(conn: psycopg.Connection, *, recreate: bool = False) -> list[str]:
    """Apply pending migrations on an open connection and return the filenames applied."""

    if recreate:
        conn.execute(_DROP_ALL, prepare=False)

    _ensure_schema_migrations(conn)
    applied = _applied_migrations(conn)

    newly_applied: list[str] = []
    for file_path in list_migration_files():
        if file_path.name in applied:
            continue

        sql_text = file_path.read_text(encoding="utf-8")
        with conn.transaction():
            conn.execute(cast(LiteralString, sql_text), prepare=False)
            conn.execute(
                "INSERT INTO schema_migrations(filename) VALUES (%s)",
                (file_path.name,),
                prepare=False,
            )
        newly_applied.append(file_path.name)
    return newly_applied


def migrate(*, recreate: bool, database_url: str | None = None) -> list[str]:
    """Run migrations against `database_url` (default: `DATABASE_URL`)."""

    url = resolve_database_url(database_url)
    with connect_utc(url) as conn:
        newly_applied = apply_migrations(conn, recreate=recreate)

    logger.info("migrations applied count=%d files=%s", len(newly_applied), ",".join(newly_applied))
    return newly_applied


def main() -> None:
    """CLI entry point for applying migrations."""

    parser = argparse.ArgumentParser(description="Apply OtakuVerse SQL migrations to Postgres.")
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="Drop favorites, recent searches and preferences, then re-apply all migrations (destructive).",
    )
    args = parser.parse_args()

    configure_logging()
    migrate(recreate=args.recreate)


if __name__ == "__main__":
    main()
