"""SQLAlchemy models for the Terminal Terrors backend."""

from .player import Player
from .player_data import PlayerData
from .presence import OnlinePlayer

__all__ = [
    "Player",
    "PlayerData",
    "OnlinePlayer",
]
