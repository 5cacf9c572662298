"""Error taxonomy shared by services and the HTTP layer.

Services raise these; the handlers registered in ``micropost.app.create_app``
map them to JSON responses with the carried ``status_code``. ``ConfigError``
is raised at startup only and never reaches a client.
"""

from enum import Enum


class ConfigError(Exception):
    """Raised when required configuration (e.g. the signing secret) is missing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AppError(Exception):
    """Base for errors reported to the API caller."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input, including malformed resource ids."""

    status_code = 400


class AuthFailure(str, Enum):
    NO_TOKEN = "no_token"
    INVALID_TOKEN = "invalid_token"


class AuthenticationError(AppError):
    """Missing, invalid, or expired bearer token; also failed login."""

    status_code = 401

    def __init__(self, message: str, kind: AuthFailure = AuthFailure.INVALID_TOKEN) -> None:
        self.kind = kind
        super().__init__(message)


class AuthorizationError(AppError):
    """Role or ownership mismatch."""

    status_code = 403


class ForbiddenError(AuthorizationError):
    """Authenticated, but the caller's role is not allowed."""

    status_code = 403


class OwnershipError(AuthorizationError):
    """Authenticated, but the caller does not own the resource."""

    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation (duplicate username)."""

    status_code = 400


class InternalError(AppError):
    """Unexpected store or runtime failure; message is always generic."""

    status_code = 500
