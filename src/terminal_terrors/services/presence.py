"""Online presence tracking with a read-time freshness window.

An account is online when its heartbeat row was touched within the presence
window. ``list_online`` applies that window itself; ``sweep`` only reclaims
storage and is never needed for a correct answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from terminal_terrors.core.errors import StorageFailureError
from terminal_terrors.core.settings import settings
from terminal_terrors.db.time import as_utc, utcnow
from terminal_terrors.models import OnlinePlayer, Player, PlayerData
from terminal_terrors.models.presence import STATUS_ONLINE

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


@dataclass(frozen=True)
class OnlineEntry:
    """A live presence row joined with display metadata."""

    player_id: int
    username: str
    last_seen: datetime
    character_name: str | None
    level: int | None


class PresenceTracker:
    """Insert, refresh, expire, and list presence rows for accounts."""

    def __init__(self, db: Session, window: timedelta | None = None) -> None:
        self.db = db
        self.window = window or timedelta(seconds=settings.presence_window_seconds)

    def cutoff(self, now: datetime | None = None) -> datetime:
        """Return the oldest ``last_seen`` still considered online."""
        return (now or utcnow()) - self.window

    def mark_online(self, player_id: int, *, now: datetime | None = None) -> None:
        """Insert or refresh the presence row for ``player_id``.

        Runs as a single upsert statement so concurrent heartbeats for one
        account can never produce a second row.
        """
        seen_at = now or utcnow()
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        try:
            if insert is None:
                self.db.merge(
                    OnlinePlayer(player_id=player_id, last_seen=seen_at, status=STATUS_ONLINE)
                )
            else:
                stmt = insert(OnlinePlayer).values(
                    player_id=player_id, last_seen=seen_at, status=STATUS_ONLINE
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[OnlinePlayer.player_id],
                    set_={"last_seen": seen_at, "status": STATUS_ONLINE},
                )
                self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Failed to mark player %s online: %s", player_id, err)
            raise StorageFailureError("Failed to update online status") from err

    def mark_offline(self, player_id: int) -> None:
        """Remove the presence row for ``player_id``; absent rows are fine."""
        try:
            self.db.execute(delete(OnlinePlayer).where(OnlinePlayer.player_id == player_id))
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Failed to mark player %s offline: %s", player_id, err)
            raise StorageFailureError("Failed to update online status") from err

    def list_online(self, *, now: datetime | None = None) -> list[OnlineEntry]:
        """Return every account seen within the presence window.

        Accounts without a save record are included with null character
        fields. Ordering is not guaranteed.
        """
        stmt = (
            select(
                OnlinePlayer.player_id,
                Player.username,
                OnlinePlayer.last_seen,
                PlayerData.character_name,
                PlayerData.level,
            )
            .join(Player, Player.id == OnlinePlayer.player_id)
            .outerjoin(PlayerData, PlayerData.player_id == Player.id)
            .where(OnlinePlayer.last_seen >= self.cutoff(now))
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as err:
            logger.error("Failed to list online players: %s", err)
            raise StorageFailureError("Failed to get online players") from err

        return [
            OnlineEntry(
                player_id=row.player_id,
                username=row.username,
                last_seen=as_utc(row.last_seen),
                character_name=row.character_name,
                level=row.level,
            )
            for row in rows
        ]

    def sweep(self, *, now: datetime | None = None) -> int:
        """Delete rows strictly older than the presence window.

        Returns:
            Number of rows removed.
        """
        # Loaded rows are expired by the commit; skip in-Python evaluation of the cutoff.
        stmt = (
            delete(OnlinePlayer)
            .where(OnlinePlayer.last_seen < self.cutoff(now))
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            raise StorageFailureError("Failed to sweep stale presence entries") from err

        removed = int(result.rowcount or 0)
        if removed:
            logger.debug("Swept %d stale presence entries", removed)
        return removed
