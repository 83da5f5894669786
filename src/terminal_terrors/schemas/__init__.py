# src/terminal_terrors/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest
from .player import OnlinePlayersResponse, PlayerDataResponse, SaveData, SaveSnapshot

__all__ = [
    "AuthResponse", "ErrorResponse", "LoginRequest", "RegisterRequest",
    "OnlinePlayersResponse", "PlayerDataResponse", "SaveData", "SaveSnapshot",
]
