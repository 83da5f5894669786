"""Tests for save record persistence."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from terminal_terrors.core.errors import (
    ConflictError,
    NotFoundError,
    StorageFailureError,
    ValidationFailedError,
)
from terminal_terrors.models import PlayerData
from terminal_terrors.schemas.player import SaveData
from terminal_terrors.services.saves import SaveStore, to_save_data, validate_character_identity


@pytest.fixture()
def store(db_session) -> SaveStore:
    return SaveStore(db_session)


def test_get_returns_none_without_character(store, test_player) -> None:
    assert store.get(test_player.id) is None
    assert store.load(test_player.id) is None


def test_create_applies_starting_values(store, test_player) -> None:
    record = store.create(test_player.id, "Scout", "Courier")

    assert record.player_id == test_player.id
    assert (record.level, record.gold, record.turns) == (1, 50, 20)
    assert (record.health, record.max_health, record.sanity, record.max_sanity) == (
        100,
        100,
        100,
        100,
    )
    assert record.inventory == "[]"

    data = store.load(test_player.id)
    assert data.inventory == []
    assert data.weapon is None
    assert data.current_package is None


def test_create_twice_conflicts(store, test_player) -> None:
    store.create(test_player.id, "Scout", "Courier")
    with pytest.raises(ConflictError):
        store.create(test_player.id, "Other", "Warden")


def test_replace_requires_existing_record(store, test_player) -> None:
    with pytest.raises(NotFoundError):
        store.replace(test_player.id, SaveData(name="Scout", character_class="Courier"))


def test_replace_overwrites_all_fields(store, test_player) -> None:
    store.create(test_player.id, "Scout", "Courier")
    store.replace(
        test_player.id,
        SaveData(
            name="Scout",
            character_class="Courier",
            level=7,
            experience=1200,
            gold=3,
            bank_gold=400,
            delivery_rank=2,
            inventory=[{"item": "flare"}],
            weapon={"name": "Crowbar"},
        ),
    )

    data = store.load(test_player.id)
    assert data.level == 7
    assert data.experience == 1200
    assert data.gold == 3
    assert data.bank_gold == 400
    assert data.delivery_rank == 2
    assert data.inventory == [{"item": "flare"}]
    assert data.weapon == {"name": "Crowbar"}


def test_save_creates_then_overwrites(store, test_player) -> None:
    _, created = store.save(test_player.id, SaveData(name="Scout", character_class="Courier"))
    assert created is True

    record, created = store.save(
        test_player.id, SaveData(name="Scout", character_class="Courier", turns=3)
    )
    assert created is False
    assert record.turns == 3


def test_save_recovers_when_row_appears_concurrently(store, test_player, mocker) -> None:
    """A duplicate insert from a racing first save falls back to an overwrite."""
    store.save(test_player.id, SaveData(name="Scout", character_class="Courier"))

    real_get = store.get
    calls: list[int] = []

    def racing_get(player_id: int):
        calls.append(player_id)
        return None if len(calls) == 1 else real_get(player_id)

    mocker.patch.object(store, "get", side_effect=racing_get)

    record, created = store.save(
        test_player.id, SaveData(name="Scout", character_class="Courier", gold=77)
    )
    assert created is False
    assert record.gold == 77
    assert len(calls) == 2


@pytest.mark.parametrize(
    ("name", "character_class"),
    [(None, "Courier"), ("Scout", None), ("", "Courier"), ("   ", "Courier")],
)
def test_blank_identity_rejected(store, test_player, name, character_class) -> None:
    with pytest.raises(ValidationFailedError):
        validate_character_identity(name, character_class)
    with pytest.raises(ValidationFailedError):
        store.save(test_player.id, SaveData(name=name, character_class=character_class))
    assert store.get(test_player.id) is None


def test_failed_save_keeps_previous_record(store, db_session, test_player, mocker) -> None:
    store.save(test_player.id, SaveData(name="Scout", character_class="Courier", gold=9))

    mocker.patch.object(
        db_session, "commit", side_effect=OperationalError("UPDATE", {}, Exception("disk full"))
    )
    with pytest.raises(StorageFailureError):
        store.save(test_player.id, SaveData(name="Scout", character_class="Courier", gold=500))
    mocker.stopall()

    data = store.load(test_player.id)
    assert data.gold == 9


def test_stored_values_outside_request_bounds_still_load(db_session, test_player) -> None:
    """Rows written before bounds existed are returned as stored."""
    record = PlayerData(
        player_id=test_player.id,
        character_name="Relic",
        character_class="Courier",
        gold=-5,
        level=0,
    )
    db_session.add(record)
    db_session.commit()

    data = to_save_data(record)
    assert data.gold == -5
    assert data.level == 0
    assert data.character_class == "Courier"
    assert data.inventory == []
