"""Prepare the configured database before the API starts.

PostgreSQL databases are created through the ``postgres`` maintenance
database when missing. SQLite files appear on first connect, so only the
table flags matter there.
"""
from __future__ import annotations

import argparse
import logging
import sys

import psycopg
from psycopg import sql
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from terminal_terrors.core.log_config import configure_logging
from terminal_terrors.core.settings import normalize_database_url, settings
from terminal_terrors.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def is_postgres_url(uri: str) -> bool:
    return normalize_database_url(uri).startswith("postgresql")


def maintenance_target(db_url: str) -> tuple[str, str]:
    """Split ``db_url`` into a psycopg conninfo for ``postgres`` and the target name.

    Raises:
        ValueError: If the URL is empty, unparsable, or not PostgreSQL.
    """
    if not db_url or not db_url.strip():
        raise ValueError("DATABASE_URL is empty")
    try:
        url = make_url(normalize_database_url(db_url))
    except ArgumentError as exc:
        raise ValueError(f"Cannot parse database URL: {exc}") from exc
    if url.get_backend_name() != "postgresql":
        raise ValueError(f"Not a PostgreSQL URL: {url.render_as_string()}")

    target = url.database or "postgres"
    admin = url.set(drivername="postgresql", database="postgres")
    return admin.render_as_string(hide_password=False), target


def ensure_database_exists(db_url: str) -> bool:
    """Create the target Postgres database if it does not exist yet.

    Returns:
        True if this call created the database.
    """
    conninfo, target = maintenance_target(db_url)
    with psycopg.connect(conninfo, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target,))
        if cur.fetchone() is not None:
            logger.info("Database %s already exists", target)
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target)))
    logger.info("Created database %s", target)
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure or reset the configured database")
    tables = parser.add_mutually_exclusive_group()
    tables.add_argument(
        "--create-tables",
        action="store_true",
        help="Create any missing tables once the database exists.",
    )
    tables.add_argument(
        "--reset-tables",
        action="store_true",
        help="Drop and recreate every table (destroys all accounts and saves).",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Postgres URL for the existence check; tables always use DATABASE_URL.",
    )
    args = parser.parse_args()
    configure_logging()

    target_url = args.url or settings.effective_database_url
    try:
        if is_postgres_url(target_url):
            ensure_database_exists(target_url)
        if args.reset_tables:
            drop_tables()
            create_tables()
            logger.info("Dropped and recreated all tables")
        elif args.create_tables:
            create_tables()
            logger.info("Tables are in place")
    except (ValueError, psycopg.Error, SQLAlchemyError) as exc:
        logger.error("ensure_db failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
