"""Logging setup for the API process."""

from __future__ import annotations

import logging

from terminal_terrors.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once from ``LOG_LEVEL``.

    Handlers installed by the server (uvicorn) are left alone; only the level
    and a default stream handler are applied.
    """
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("terminal_terrors").setLevel(resolved)
