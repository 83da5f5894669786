# src/terminal_terrors/models/presence.py
"""SQLAlchemy model for the online presence table."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from terminal_terrors.db.session import Base
from terminal_terrors.db.time import utcnow

if TYPE_CHECKING:
    from .player import Player

STATUS_ONLINE = "online"


class OnlinePlayer(Base):
    """Heartbeat row for an account; at most one per player.

    Rows are soft state: a row older than the presence window means offline
    whether or not the sweep has removed it yet.
    """

    __tablename__ = "online_players"

    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        primary_key=True,
    )
    last_seen: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    status: Mapped[str] = mapped_column(Text, nullable=False, default=STATUS_ONLINE)

    player: Mapped[Player] = relationship("Player", back_populates="presence")
