"""Tests for the background presence sweep worker."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from terminal_terrors.core.errors import StorageFailureError
from terminal_terrors.db.time import utcnow
from terminal_terrors.models import OnlinePlayer
from terminal_terrors.services.presence_sweeper import PresenceSweepWorker
from tests.conftest import make_player


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def _seed_presence(db_session):
    stale = make_player(db_session, "stale")
    fresh = make_player(db_session, "fresh")
    db_session.add_all(
        [
            OnlinePlayer(player_id=stale.id, last_seen=utcnow() - timedelta(hours=1)),
            OnlinePlayer(player_id=fresh.id, last_seen=utcnow()),
        ]
    )
    db_session.commit()
    return stale.id, fresh.id


def test_run_once_removes_only_stale_rows(db_session, session_factory) -> None:
    stale_id, fresh_id = _seed_presence(db_session)

    worker = PresenceSweepWorker(session_factory=session_factory, interval_seconds=60)
    assert worker.run_once() == 1

    db_session.expire_all()
    assert db_session.get(OnlinePlayer, stale_id) is None
    assert db_session.get(OnlinePlayer, fresh_id) is not None


def test_interval_defaults_to_settings() -> None:
    worker = PresenceSweepWorker(session_factory=lambda: None)
    assert worker.interval_seconds == 300.0


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_worker_sweeps_periodically(db_session, session_factory) -> None:
    stale_id, _ = _seed_presence(db_session)
    worker = PresenceSweepWorker(session_factory=session_factory, interval_seconds=0.01)

    await worker.start()
    assert worker.running
    await _wait_for(lambda: worker.runs >= 1)
    await worker.stop()

    assert not worker.running
    assert worker.failures == 0
    db_session.expire_all()
    assert db_session.get(OnlinePlayer, stale_id) is None


@pytest.mark.asyncio
async def test_worker_keeps_running_after_failures(mocker) -> None:
    factory = mocker.Mock(side_effect=StorageFailureError("database unavailable"))
    worker = PresenceSweepWorker(session_factory=factory, interval_seconds=0.01)

    await worker.start()
    await _wait_for(lambda: worker.failures >= 3)
    await worker.stop()

    assert worker.runs >= 3
    assert factory.call_count >= 3


@pytest.mark.asyncio
async def test_stop_without_start_is_noop() -> None:
    worker = PresenceSweepWorker(session_factory=lambda: None, interval_seconds=0.01)
    await worker.stop()
    assert not worker.running


@pytest.mark.asyncio
async def test_worker_survives_raw_database_errors(mocker) -> None:
    """Driver errors raised outside the tracker do not end the loop."""
    factory = mocker.Mock(
        side_effect=OperationalError("SELECT 1", {}, Exception("db gone"))
    )
    worker = PresenceSweepWorker(session_factory=factory, interval_seconds=0.01)

    await worker.start()
    await _wait_for(lambda: worker.failures >= 3)
    assert worker.running
    await worker.stop()

    assert factory.call_count >= 3
