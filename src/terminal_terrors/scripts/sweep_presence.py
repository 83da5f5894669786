# src/terminal_terrors/scripts/sweep_presence.py
"""
Cron job that removes stale online-presence rows.

The API already sweeps on a timer while it runs; this script covers
deployments that disable the in-process sweeper (PRESENCE_SWEEP_ENABLED=false)
or want an extra sweep after downtime.
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from terminal_terrors.core.errors import StorageFailureError
from terminal_terrors.core.log_config import configure_logging
from terminal_terrors.services.presence_sweeper import PresenceSweepWorker

logger = logging.getLogger(__name__)


def main() -> int:
    """Run a single sweep and report the number of rows removed."""
    configure_logging()
    try:
        removed = PresenceSweepWorker().run_once()
    except (StorageFailureError, SQLAlchemyError) as exc:
        logger.error("Presence sweep failed: %s", exc)
        return 1
    logger.info("Removed %d stale presence entries", removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
