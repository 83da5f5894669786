# src/terminal_terrors/models/player_data.py
"""SQLAlchemy model for per-account character save data."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from terminal_terrors.db.session import Base
from terminal_terrors.db.time import utcnow

if TYPE_CHECKING:
    from .player import Player

# Starting values for a freshly created character.
DEFAULT_LEVEL = 1
DEFAULT_MAX_HEALTH = 100
DEFAULT_MAX_SANITY = 100
DEFAULT_GOLD = 50
DEFAULT_TURNS = 20


class PlayerData(Base):
    """Single save slot for an account.

    The inventory and equipment columns hold serialized JSON that the backend
    never interprets; they are decoded again on read.
    """

    __tablename__ = "player_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    character_name: Mapped[str] = mapped_column(Text, nullable=False)
    character_class: Mapped[str] = mapped_column(Text, nullable=False)

    level: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_LEVEL)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    health: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_MAX_HEALTH)
    max_health: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_MAX_HEALTH)
    sanity: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_MAX_SANITY)
    max_sanity: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_MAX_SANITY)
    gold: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_GOLD)
    bank_gold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    turns: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_TURNS)
    delivery_rank: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delivery_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deliveries_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Opaque JSON payloads owned by the game client.
    inventory: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    weapon: Mapped[str] = mapped_column(Text, nullable=False, default="null")
    armor: Mapped[str] = mapped_column(Text, nullable=False, default="null")
    current_package: Mapped[str] = mapped_column(Text, nullable=False, default="null")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    player: Mapped[Player] = relationship("Player", back_populates="save")
