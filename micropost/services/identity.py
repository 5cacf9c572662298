"""Bearer token verification and resolution to a live user identity."""

import logging
from dataclasses import dataclass

import jwt

from micropost.core.errors import AuthenticationError, AuthFailure
from micropost.core.security import TokenIssuer
from micropost.services.store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

NO_TOKEN_MESSAGE = "Not authorized, no token."
INVALID_TOKEN_MESSAGE = "Not authorized, token failed or expired."


@dataclass(frozen=True)
class Identity:
    """Authenticated caller. Never carries the password hash."""

    id: int
    username: str
    role: str


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class IdentityResolver:
    """
    Turns a raw Authorization header into an Identity.

    Every outcome is exactly one of: an Identity, AuthenticationError(NO_TOKEN),
    or AuthenticationError(INVALID_TOKEN). Expired, tampered and malformed
    tokens, and tokens for deleted users, are indistinguishable to the caller;
    the specific reason is only logged.
    """

    def __init__(self, issuer: TokenIssuer, users: UserStore) -> None:
        self.issuer = issuer
        self.users = users

    def resolve(self, authorization: str | None) -> Identity:
        token = extract_bearer_token(authorization)
        if token is None:
            raise AuthenticationError(NO_TOKEN_MESSAGE, kind=AuthFailure.NO_TOKEN)

        try:
            payload = self.issuer.decode(token)
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise _invalid_token() from e

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Token rejected: unusable subject claim")
            raise _invalid_token() from e

        user = self.users.find_by_id(user_id)
        if user is None:
            logger.info("Token subject no longer exists", extra={"user_id": user_id})
            raise _invalid_token()

        return Identity(id=user.id, username=user.username, role=user.role)


def _invalid_token() -> AuthenticationError:
    return AuthenticationError(INVALID_TOKEN_MESSAGE, kind=AuthFailure.INVALID_TOKEN)
