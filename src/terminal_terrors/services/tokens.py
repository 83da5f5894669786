"""Stateless session tokens signed with the shared secret.

Tokens are never stored server-side, so a token stays valid until its expiry
even after logout; logout only clears presence. Revoking tokens early requires
rotating ``SECRET_KEY``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt

from terminal_terrors.core.errors import InvalidSignatureError, TokenExpiredError
from terminal_terrors.core.settings import settings
from terminal_terrors.db.time import utcnow


@dataclass(frozen=True)
class SessionClaims:
    """Identity bound into a validated session token."""

    player_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class SessionIssuer:
    """Mint and validate signed, time-limited session tokens."""

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, player_id: int, username: str, *, now: datetime | None = None) -> str:
        """Return a signed token for ``player_id`` valid for ``self.ttl``."""
        issued_at = now or utcnow()
        claims: dict[str, object] = {
            "sub": str(player_id),
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        encoded: str = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        return encoded

    def validate(self, token: str, *, now: datetime | None = None) -> SessionClaims:
        """Verify the signature and expiry of ``token``.

        Expiry is checked here rather than by jose so callers can pin ``now``.

        Raises:
            InvalidSignatureError: If the token is malformed, tampered with,
                signed with another secret, or missing required claims.
            TokenExpiredError: If ``now`` is at or past the embedded expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise InvalidSignatureError("Invalid token") from err

        try:
            player_id = int(payload["sub"])
            username = str(payload["username"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (KeyError, TypeError, ValueError) as err:
            raise InvalidSignatureError("Invalid token") from err

        current = now or utcnow()
        if current >= expires_at:
            raise TokenExpiredError("Token has expired")

        return SessionClaims(
            player_id=player_id,
            username=username,
            issued_at=issued_at,
            expires_at=expires_at,
        )


@lru_cache(maxsize=1)
def get_session_issuer() -> SessionIssuer:
    """Return the process-wide issuer configured from settings."""
    return SessionIssuer(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )
