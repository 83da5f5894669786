# src/terminal_terrors/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from terminal_terrors.core.log_config import configure_logging
from terminal_terrors.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    url = database_url or settings.effective_database_url
    # ConfigParser interpolation treats "%" specially (URL-encoded passwords).
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def upgrade(revision: str = "head", database_url: str | None = None) -> None:
    command.upgrade(build_config(database_url), revision)
    logger.info("Database upgraded to %s", revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run database migrations")
    parser.add_argument("revision", nargs="?", default="head", help="Target revision")
    args = parser.parse_args()
    configure_logging()
    upgrade(args.revision)


if __name__ == "__main__":
    main()
