# src/terminal_terrors/api/v1/endpoints/auth.py
"""Authentication endpoints for the Terminal Terrors API."""

from __future__ import annotations

from fastapi import APIRouter, status

from terminal_terrors.api.v1.dependencies import (
    ActiveSessionDep,
    BearerDep,
    IssuerDep,
    SessionDep,
)
from terminal_terrors.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutResponse,
    PlayerSummary,
    RegisterRequest,
    VerifiedPlayer,
    VerifyResponse,
)
from terminal_terrors.services import accounts

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new player account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
def register_player(
    payload: RegisterRequest,
    db: SessionDep,
    issuer: IssuerDep,
) -> AuthResponse:
    """Create an account and return its first session token."""
    result = accounts.register(
        db,
        issuer,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        message="Player registered successfully",
        token=result.token,
        player=PlayerSummary(
            id=result.player.id,
            username=result.player.username,
            email=result.player.email,
        ),
    )


@router.post(
    "/login",
    summary="Authenticate with username and password",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
)
def login_player(
    payload: LoginRequest,
    db: SessionDep,
    issuer: IssuerDep,
) -> AuthResponse:
    """Exchange credentials for a fresh session token."""
    result = accounts.authenticate(
        db,
        issuer,
        username=payload.username,
        password=payload.password,
    )
    return AuthResponse(
        message="Login successful",
        token=result.token,
        player=PlayerSummary.model_validate(result.player),
    )


@router.post(
    "/logout",
    summary="Mark the caller offline",
    response_model=LogoutResponse,
)
def logout_player(
    credentials: BearerDep,
    db: SessionDep,
    issuer: IssuerDep,
) -> LogoutResponse:
    """Clear presence for the presented token.

    The token remains usable until it expires; invalid or missing tokens are
    accepted silently.
    """
    accounts.logout(db, issuer, credentials.credentials if credentials else None)
    return LogoutResponse(message="Logged out successfully")


@router.get(
    "/verify",
    summary="Check that a session token is still valid",
    response_model=VerifyResponse,
)
def verify_token(claims: ActiveSessionDep) -> VerifyResponse:
    """Return the identity embedded in the caller's token."""
    return VerifyResponse(player=VerifiedPlayer(id=claims.player_id, username=claims.username))
