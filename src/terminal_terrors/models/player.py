# src/terminal_terrors/models/player.py
"""SQLAlchemy model for player accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from terminal_terrors.db.session import Base
from terminal_terrors.db.time import utcnow

if TYPE_CHECKING:
    from .player_data import PlayerData
    from .presence import OnlinePlayer


class Player(Base):
    """Account identity and credential digest for a single player."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    save: Mapped[PlayerData | None] = relationship(
        "PlayerData",
        back_populates="player",
        cascade="all, delete-orphan",
        uselist=False,
    )
    presence: Mapped[OnlinePlayer | None] = relationship(
        "OnlinePlayer",
        back_populates="player",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<Player id={self.id} username={self.username!r}>"
