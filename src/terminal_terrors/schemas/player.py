"""Player save-data and presence Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from terminal_terrors.models.player_data import (
    DEFAULT_GOLD,
    DEFAULT_LEVEL,
    DEFAULT_MAX_HEALTH,
    DEFAULT_MAX_SANITY,
    DEFAULT_TURNS,
)


class SaveSnapshot(BaseModel):
    """Full character snapshot as stored and returned to the game client.

    No bounds are applied here, so rows written before a bound existed still
    load.
    """

    name: str | None = Field(None, description="Character name")
    character_class: str | None = Field(None, alias="class", description="Character class")
    level: int = DEFAULT_LEVEL
    experience: int = 0
    health: int = DEFAULT_MAX_HEALTH
    max_health: int = DEFAULT_MAX_HEALTH
    sanity: int = DEFAULT_MAX_SANITY
    max_sanity: int = DEFAULT_MAX_SANITY
    gold: int = DEFAULT_GOLD
    bank_gold: int = 0
    turns: int = DEFAULT_TURNS
    delivery_rank: int = 0
    delivery_streak: int = 0
    deliveries_completed: int = 0
    inventory: list[Any] = Field(default_factory=list, description="Opaque inventory items")
    weapon: Any = Field(None, description="Opaque equipped weapon")
    armor: Any = Field(None, description="Opaque equipped armor")
    current_package: Any = Field(None, description="Opaque active delivery package")

    model_config = ConfigDict(populate_by_name=True)


class SaveData(SaveSnapshot):
    """Save submitted by the game client.

    Omitted numeric fields fall back to a new character's starting values.
    Only non-negativity is enforced; relations such as health versus
    max_health are the client's concern.
    """

    level: int = Field(DEFAULT_LEVEL, ge=1)
    experience: int = Field(0, ge=0)
    health: int = Field(DEFAULT_MAX_HEALTH, ge=0)
    max_health: int = Field(DEFAULT_MAX_HEALTH, ge=0)
    sanity: int = Field(DEFAULT_MAX_SANITY, ge=0)
    max_sanity: int = Field(DEFAULT_MAX_SANITY, ge=0)
    gold: int = Field(DEFAULT_GOLD, ge=0)
    bank_gold: int = Field(0, ge=0)
    turns: int = Field(DEFAULT_TURNS, ge=0)
    delivery_rank: int = Field(0, ge=0)
    delivery_streak: int = Field(0, ge=0)
    deliveries_completed: int = Field(0, ge=0)


class PlayerDataResponse(BaseModel):
    """Response for reading the caller's save data."""

    success: bool = True
    has_character: bool = Field(..., alias="hasCharacter")
    data: SaveSnapshot | None = None

    model_config = ConfigDict(populate_by_name=True)


class SaveResponse(BaseModel):
    """Response after a save-data write."""

    success: bool = True
    message: str
    created: bool = Field(..., description="True if this write created the character")


class OnlinePlayerOut(BaseModel):
    """Public view of an online player."""

    username: str
    character_name: str | None = None
    level: int
    last_seen: datetime


class OnlinePlayersResponse(BaseModel):
    """Response listing currently online players."""

    success: bool = True
    count: int
    players: list[OnlinePlayerOut]


class HeartbeatResponse(BaseModel):
    """Acknowledgement for a presence heartbeat."""

    success: bool = True
