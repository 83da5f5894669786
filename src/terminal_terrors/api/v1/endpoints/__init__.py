# src/terminal_terrors/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .player import router as player_router

__all__ = [
    "auth_router",
    "player_router",
]
