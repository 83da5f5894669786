"""Persistence for the single save slot each account owns."""
from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from terminal_terrors.core.errors import (
    ConflictError,
    NotFoundError,
    StorageFailureError,
    ValidationFailedError,
)
from terminal_terrors.db.time import utcnow
from terminal_terrors.models import PlayerData
from terminal_terrors.schemas.player import SaveData, SaveSnapshot

__all__ = ["SaveStore", "to_save_data", "validate_character_identity"]

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = (
    "level",
    "experience",
    "health",
    "max_health",
    "sanity",
    "max_sanity",
    "gold",
    "bank_gold",
    "turns",
    "delivery_rank",
    "delivery_streak",
    "deliveries_completed",
)
_BLOB_FIELDS = ("inventory", "weapon", "armor", "current_package")


def validate_character_identity(name: str | None, character_class: str | None) -> tuple[str, str]:
    """Reject blank character names or classes before anything is written."""
    if not name or not name.strip() or not character_class or not character_class.strip():
        raise ValidationFailedError("Character name and class are required")
    return name, character_class


def _dump_blob(value: Any) -> str:
    return json.dumps(value)


def _load_blob(raw: str | None) -> Any:
    if raw is None:
        return None
    return json.loads(raw)


def to_save_data(record: PlayerData) -> SaveSnapshot:
    """Rehydrate a stored row into the client-facing snapshot.

    Request bounds are not re-applied, so stored values load as written.
    """
    values: dict[str, Any] = {
        "name": record.character_name,
        "character_class": record.character_class,
    }
    for field in _SCALAR_FIELDS:
        values[field] = getattr(record, field)
    for field in _BLOB_FIELDS:
        values[field] = _load_blob(getattr(record, field))
    return SaveSnapshot.model_validate(values)


class SaveStore:
    """Create, read, and overwrite save records keyed by player id."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, player_id: int) -> PlayerData | None:
        """Return the stored row, or None when no character exists yet."""
        try:
            return self.db.execute(
                select(PlayerData).where(PlayerData.player_id == player_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as err:
            logger.error("Failed to load save data for player %s: %s", player_id, err)
            raise StorageFailureError("Failed to get player data") from err

    def load(self, player_id: int) -> SaveSnapshot | None:
        """Return the rehydrated snapshot, or None when no character exists yet."""
        record = self.get(player_id)
        return to_save_data(record) if record is not None else None

    def create(self, player_id: int, character_name: str, character_class: str) -> PlayerData:
        """Insert a new character with starting values.

        Raises:
            ValidationFailedError: If name or class is blank.
            ConflictError: If the account already has a save record.
        """
        name, character_class = validate_character_identity(character_name, character_class)
        if self.get(player_id) is not None:
            raise ConflictError("Save data already exists for this player")

        record = self._insert(player_id, name, character_class)
        self._commit(player_id, "create")
        return record

    def replace(self, player_id: int, data: SaveData) -> PlayerData:
        """Overwrite every field of an existing record with ``data``.

        Raises:
            ValidationFailedError: If name or class is blank.
            NotFoundError: If the account has no save record.
        """
        validate_character_identity(data.name, data.character_class)
        record = self.get(player_id)
        if record is None:
            raise NotFoundError("No save data for this player")

        self._apply(record, data)
        self._commit(player_id, "replace")
        return record

    def save(self, player_id: int, data: SaveData) -> tuple[PlayerData, bool]:
        """Create the record on first save, then overwrite it in full.

        Both steps commit together, so a failure leaves any previous row as it
        was.

        Returns:
            The stored row and whether this call created it.
        """
        name, character_class = validate_character_identity(data.name, data.character_class)
        record = self.get(player_id)
        created = record is None
        if record is None:
            record = self._insert(player_id, name, character_class)
        self._apply(record, data)
        try:
            self._commit(player_id, "save")
        except ConflictError:
            # Another request created the row first; overwrite it instead.
            return self.replace(player_id, data), False
        return record, created

    def _insert(self, player_id: int, name: str, character_class: str) -> PlayerData:
        record = PlayerData(
            player_id=player_id,
            character_name=name,
            character_class=character_class,
        )
        self.db.add(record)
        return record

    def _apply(self, record: PlayerData, data: SaveData) -> None:
        record.character_name = data.name or record.character_name
        record.character_class = data.character_class or record.character_class
        for field in _SCALAR_FIELDS:
            setattr(record, field, getattr(data, field))
        for field in _BLOB_FIELDS:
            setattr(record, field, _dump_blob(getattr(data, field)))
        record.updated_at = utcnow()

    def _commit(self, player_id: int, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError("Save data already exists for this player") from err
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Failed to %s save data for player %s: %s", action, player_id, err)
            raise StorageFailureError("Failed to save player data") from err
