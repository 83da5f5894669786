"""Domain error kinds shared by services and the HTTP layer.

Each error carries a stable ``kind`` identifier and the HTTP status the API
maps it to, so the request boundary can render failures without inspecting
messages.
"""

from __future__ import annotations

from fastapi import status


class TerrorsError(Exception):
    """Base class for all expected service failures."""

    kind: str = "error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(TerrorsError):
    """Requested account or record does not exist."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(TerrorsError):
    """Duplicate username, email, or save record."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class InvalidCredentialError(TerrorsError):
    """Unknown username or wrong password; the two are deliberately indistinguishable."""

    kind = "invalid_credential"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class AuthenticationRequiredError(TerrorsError):
    """No bearer token was supplied on a protected route."""

    kind = "authentication_required"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class InvalidSignatureError(TerrorsError):
    """Token signature mismatch or a token that cannot be decoded at all."""

    kind = "invalid_signature"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class TokenExpiredError(TerrorsError):
    """Token signature is valid but its expiry has passed."""

    kind = "expired"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token has expired"


class ValidationFailedError(TerrorsError):
    """Missing or malformed registration, login, or character fields."""

    kind = "validation_failed"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class StorageFailureError(TerrorsError):
    """The underlying store rejected or could not complete an operation."""

    kind = "storage_failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage unavailable"


__all__ = [
    "TerrorsError",
    "NotFoundError",
    "ConflictError",
    "InvalidCredentialError",
    "AuthenticationRequiredError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "ValidationFailedError",
    "StorageFailureError",
]
