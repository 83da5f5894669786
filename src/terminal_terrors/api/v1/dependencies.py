"""Shared API dependencies for authentication and presence refresh."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from terminal_terrors.core.errors import AuthenticationRequiredError
from terminal_terrors.db.session import get_db
from terminal_terrors.services.presence import PresenceTracker
from terminal_terrors.services.tokens import SessionClaims, SessionIssuer, get_session_issuer

# HTTP Bearer scheme for JWT authentication; missing tokens are reported by us.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_issuer_dep() -> SessionIssuer:
    return get_session_issuer()


IssuerDep = Annotated[SessionIssuer, Depends(get_issuer_dep)]


def get_current_session(credentials: BearerDep, issuer: IssuerDep) -> SessionClaims:
    """Validate the bearer token without touching storage.

    Raises:
        AuthenticationRequiredError: If no bearer token was sent.
        InvalidSignatureError: If the token was tampered with or is malformed.
        TokenExpiredError: If the token is past its expiry.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError()
    return issuer.validate(credentials.credentials)


CurrentSessionDep = Annotated[SessionClaims, Depends(get_current_session)]


def get_active_session(claims: CurrentSessionDep, db: SessionDep) -> SessionClaims:
    """Validate the token, then refresh the caller's presence.

    Every authenticated request counts as a heartbeat.
    """
    PresenceTracker(db).mark_online(claims.player_id)
    return claims


# Type alias for an authenticated caller whose presence was refreshed
ActiveSessionDep = Annotated[SessionClaims, Depends(get_active_session)]
