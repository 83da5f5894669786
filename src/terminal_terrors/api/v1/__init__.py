# src/terminal_terrors/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import auth_router, player_router

__all__ = [
    "auth_router",
    "player_router",
]
