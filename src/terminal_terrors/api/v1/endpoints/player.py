# src/terminal_terrors/api/v1/endpoints/player.py
"""Save-data and online-presence endpoints for authenticated players."""

from __future__ import annotations

from fastapi import APIRouter

from terminal_terrors.api.v1.dependencies import (
    ActiveSessionDep,
    CurrentSessionDep,
    SessionDep,
)
from terminal_terrors.models.player_data import DEFAULT_LEVEL
from terminal_terrors.schemas.player import (
    HeartbeatResponse,
    OnlinePlayerOut,
    OnlinePlayersResponse,
    PlayerDataResponse,
    SaveData,
    SaveResponse,
)
from terminal_terrors.services.presence import PresenceTracker
from terminal_terrors.services.saves import SaveStore, validate_character_identity

router = APIRouter(prefix="/player", tags=["player"])


@router.get("/data", response_model=PlayerDataResponse)
def get_player_data(claims: ActiveSessionDep, db: SessionDep) -> PlayerDataResponse:
    """Return the caller's save data, or ``hasCharacter: false`` if none exists."""
    data = SaveStore(db).load(claims.player_id)
    return PlayerDataResponse(has_character=data is not None, data=data)


@router.put("/data", response_model=SaveResponse)
def save_player_data(
    payload: SaveData,
    claims: CurrentSessionDep,
    db: SessionDep,
) -> SaveResponse:
    """Overwrite the caller's save data, creating the character on first save."""
    # Reject before the presence refresh so invalid saves write nothing.
    validate_character_identity(payload.name, payload.character_class)
    PresenceTracker(db).mark_online(claims.player_id)

    _, created = SaveStore(db).save(claims.player_id, payload)
    return SaveResponse(message="Game data saved successfully", created=created)


@router.get("/online", response_model=OnlinePlayersResponse)
def list_online_players(claims: ActiveSessionDep, db: SessionDep) -> OnlinePlayersResponse:
    """List players seen within the presence window."""
    tracker = PresenceTracker(db)
    tracker.sweep()
    entries = tracker.list_online()
    players = [
        OnlinePlayerOut(
            username=entry.username,
            character_name=entry.character_name,
            level=entry.level if entry.level is not None else DEFAULT_LEVEL,
            last_seen=entry.last_seen,
        )
        for entry in entries
    ]
    return OnlinePlayersResponse(count=len(players), players=players)


@router.post("/heartbeat", response_model=HeartbeatResponse)
def heartbeat(claims: ActiveSessionDep) -> HeartbeatResponse:
    """Keep the caller online; the presence refresh happens in the dependency."""
    return HeartbeatResponse()
