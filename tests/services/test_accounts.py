"""Tests for the account service."""

from __future__ import annotations

import pytest

from terminal_terrors.core.errors import (
    ConflictError,
    InvalidCredentialError,
    ValidationFailedError,
)
from terminal_terrors.models import OnlinePlayer
from terminal_terrors.services import accounts
from tests.conftest import TEST_PASSWORD


def test_register_hashes_password_and_issues_token(db_session, issuer) -> None:
    result = accounts.register(
        db_session, issuer, username="carol", email=None, password="hunter22"
    )

    assert result.player.id is not None
    assert result.player.email is None
    assert result.player.password_hash.startswith("$2")
    assert issuer.validate(result.token).username == "carol"
    assert db_session.get(OnlinePlayer, result.player.id) is not None


def test_register_blank_email_stored_as_null(db_session, issuer) -> None:
    first = accounts.register(db_session, issuer, username="one", email="", password="secret1")
    second = accounts.register(db_session, issuer, username="two", email="", password="secret1")
    assert first.player.email is None
    assert second.player.email is None


def test_register_duplicate_username(db_session, issuer, test_player) -> None:
    with pytest.raises(ConflictError):
        accounts.register(db_session, issuer, username="alice", email=None, password="secret1")


@pytest.mark.parametrize(
    ("username", "password"),
    [(None, "secret1"), ("alice", None), ("al", "secret1"), ("a" * 21, "secret1"), ("alice", "short")],
)
def test_register_validation(db_session, issuer, username, password) -> None:
    with pytest.raises(ValidationFailedError):
        accounts.register(db_session, issuer, username=username, email=None, password=password)
    assert accounts.get_player_by_username(db_session, "alice") is None


def test_authenticate_updates_last_login(db_session, issuer, test_player) -> None:
    result = accounts.authenticate(
        db_session, issuer, username="alice", password=TEST_PASSWORD
    )
    assert result.player.id == test_player.id
    assert result.player.last_login is not None
    assert issuer.validate(result.token).player_id == test_player.id


def test_authenticate_failures_share_message(db_session, issuer, test_player) -> None:
    with pytest.raises(InvalidCredentialError) as wrong_password:
        accounts.authenticate(db_session, issuer, username="alice", password="nope-nope")
    with pytest.raises(InvalidCredentialError) as unknown_user:
        accounts.authenticate(db_session, issuer, username="nobody", password=TEST_PASSWORD)
    assert wrong_password.value.message == unknown_user.value.message


def test_authenticate_checks_dummy_hash_for_unknown_user(db_session, issuer, mocker) -> None:
    verify = mocker.spy(accounts.security, "verify_password")
    with pytest.raises(InvalidCredentialError):
        accounts.authenticate(db_session, issuer, username="nobody", password="secret1")
    verify.assert_called_once()


def test_logout_clears_presence(db_session, issuer, test_player) -> None:
    token = issuer.issue(test_player.id, test_player.username)
    accounts.authenticate(db_session, issuer, username="alice", password=TEST_PASSWORD)

    assert accounts.logout(db_session, issuer, token) is True
    db_session.expire_all()
    assert db_session.get(OnlinePlayer, test_player.id) is None
    # Tokens are stateless and survive logout.
    assert issuer.validate(token).player_id == test_player.id


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_logout_ignores_missing_or_invalid_tokens(db_session, issuer, token) -> None:
    assert accounts.logout(db_session, issuer, token) is False
