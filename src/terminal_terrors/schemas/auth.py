"""Authentication-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for account registration.

    Fields are optional here so missing values are reported by the account
    service with a specific message.
    """

    username: str | None = Field(None, description="Unique handle, 3-20 characters")
    email: str | None = Field(None, description="Optional contact address")
    password: str | None = Field(None, description="Plaintext password, at least 6 characters")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str | None = Field(None, description="Registered username")
    password: str | None = Field(None, description="Plaintext password")


class PlayerSummary(BaseModel):
    """Account fields returned alongside a session token."""

    id: int
    username: str
    email: str | None = None
    last_login: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response returned after successful registration or login."""

    success: bool = True
    message: str
    token: str = Field(..., description="JWT bearer token valid for 7 days")
    player: PlayerSummary


class LogoutResponse(BaseModel):
    """Response returned after logout."""

    success: bool = True
    message: str


class VerifiedPlayer(BaseModel):
    """Identity embedded in a validated token."""

    id: int
    username: str


class VerifyResponse(BaseModel):
    """Response for token verification."""

    success: bool = True
    valid: bool = True
    player: VerifiedPlayer


class ErrorResponse(BaseModel):
    """Body rendered for every handled failure."""

    success: bool = False
    error: str = Field(..., description="Stable error kind")
    detail: str = Field(..., description="Human-readable message")
