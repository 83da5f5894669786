"""Registration, login, and logout for player accounts."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from terminal_terrors.core import security
from terminal_terrors.core.errors import (
    ConflictError,
    InvalidCredentialError,
    InvalidSignatureError,
    StorageFailureError,
    TokenExpiredError,
    ValidationFailedError,
)
from terminal_terrors.db.time import utcnow
from terminal_terrors.models import Player
from terminal_terrors.services.presence import PresenceTracker
from terminal_terrors.services.tokens import SessionIssuer

__all__ = [
    "AuthResult",
    "get_player_by_username",
    "register",
    "authenticate",
    "logout",
]

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Checked when the username is unknown so both failure paths cost the same.
    return security.hash_password("terminal-terrors-dummy-password")


@dataclass(frozen=True)
class AuthResult:
    """Account and freshly issued token from a successful register or login."""

    player: Player
    token: str


def get_player_by_username(db: Session, username: str) -> Player | None:
    """Return a single account by its unique username."""
    try:
        return db.execute(select(Player).where(Player.username == username)).scalar_one_or_none()
    except SQLAlchemyError as err:
        raise StorageFailureError("Failed to look up player") from err


def _validate_registration(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not password:
        raise ValidationFailedError("Username and password are required")
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationFailedError(
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationFailedError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    return username, password


def register(
    db: Session,
    issuer: SessionIssuer,
    *,
    username: str | None,
    email: str | None,
    password: str | None,
) -> AuthResult:
    """Create an account, issue its first token, and mark it online.

    Raises:
        ValidationFailedError: If username or password is missing or malformed.
        ConflictError: If the username or email is already registered.
    """
    username, password = _validate_registration(username, password)
    email = email or None

    if get_player_by_username(db, username) is not None:
        raise ConflictError("Username already taken")

    player = Player(
        username=username,
        email=email,
        password_hash=security.hash_password(password),
    )
    db.add(player)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Username or email already registered") from err
    except SQLAlchemyError as err:
        db.rollback()
        raise StorageFailureError("Failed to register player") from err
    db.refresh(player)

    token = issuer.issue(player.id, player.username)
    PresenceTracker(db).mark_online(player.id)
    logger.info("Registered player %s (id=%s)", player.username, player.id)
    return AuthResult(player=player, token=token)


def authenticate(
    db: Session,
    issuer: SessionIssuer,
    *,
    username: str | None,
    password: str | None,
) -> AuthResult:
    """Verify credentials, stamp ``last_login``, and issue a fresh token.

    Raises:
        ValidationFailedError: If username or password is missing.
        InvalidCredentialError: If the username is unknown or the password is wrong.
    """
    if not username or not password:
        raise ValidationFailedError("Username and password are required")

    player = get_player_by_username(db, username)
    if player is None:
        security.verify_password(password, _dummy_hash())
        logger.info("Rejected login for unknown username")
        raise InvalidCredentialError()
    if not security.verify_password(password, player.password_hash):
        logger.info("Rejected login for player id=%s", player.id)
        raise InvalidCredentialError()

    player.last_login = utcnow()
    try:
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        raise StorageFailureError("Failed to login") from err
    db.refresh(player)

    token = issuer.issue(player.id, player.username)
    PresenceTracker(db).mark_online(player.id)
    logger.info("Player %s logged in", player.username)
    return AuthResult(player=player, token=token)


def logout(db: Session, issuer: SessionIssuer, token: str | None) -> bool:
    """Clear presence for the token's account.

    The token itself stays valid until it expires. Missing or invalid tokens
    are ignored.

    Returns:
        True if a valid token was presented and presence was cleared.
    """
    if not token:
        return False
    try:
        claims = issuer.validate(token)
    except (InvalidSignatureError, TokenExpiredError):
        return False
    PresenceTracker(db).mark_offline(claims.player_id)
    return True
