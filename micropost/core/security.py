"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from micropost.core.errors import ConfigError

# Bcrypt cost (rounds) used when the caller does not pass one.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

TOKEN_VALIDITY = timedelta(days=30)


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenIssuer:
    """
    Issues and verifies signed access tokens with a single shared secret.

    Built once at startup from settings. An empty secret raises ConfigError
    so the process refuses to start rather than failing per request.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        expires_in: timedelta = TOKEN_VALIDITY,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigError("JWT signing secret is not configured")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, role: str, now: datetime | None = None) -> str:
        """Create a JWT access token with sub/id (user id), role, iat and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "id": user_id,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Decode and validate JWT; return payload (sub, id, role, exp, iat).
        Raises jwt.PyJWTError on invalid or expired token.
        """
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
