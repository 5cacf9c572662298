"""Unit tests for micropost.services.identity: bearer extraction and identity resolution."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from micropost.core.errors import AuthenticationError, AuthFailure
from micropost.core.security import TokenIssuer
from micropost.services.identity import (
    INVALID_TOKEN_MESSAGE,
    NO_TOKEN_MESSAGE,
    Identity,
    IdentityResolver,
    extract_bearer_token,
)

SECRET = "identity-test-secret"


def _user(user_id: int = 1, username: str = "alice", role: str = "user") -> SimpleNamespace:
    """Stand-in for a User row, including the hash the resolver must drop."""
    return SimpleNamespace(id=user_id, username=username, role=role, password_hash="$2b$hash")


class TestExtractBearerToken(unittest.TestCase):
    """Only 'Bearer <token>' yields a token."""

    def test_valid_header(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_missing_or_wrong_scheme(self) -> None:
        for header in (None, "", "Bearer", "Bearer ", "Basic abc", "Token abc", "bearer abc", "Bearerabc"):
            with self.subTest(header=header):
                self.assertIsNone(extract_bearer_token(header))


class TestIdentityResolver(unittest.TestCase):
    """resolve() returns an Identity or raises exactly one AuthenticationError kind."""

    def setUp(self) -> None:
        self.issuer = TokenIssuer(SECRET)
        self.users = MagicMock()
        self.users.find_by_id.return_value = _user()
        self.resolver = IdentityResolver(self.issuer, self.users)

    def _assert_fails(self, header: str | None, kind: AuthFailure, message: str) -> None:
        with self.assertRaises(AuthenticationError) as ctx:
            self.resolver.resolve(header)
        self.assertEqual(ctx.exception.kind, kind)
        self.assertEqual(ctx.exception.message, message)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_valid_token_resolves_identity_without_hash(self) -> None:
        identity = self.resolver.resolve(f"Bearer {self.issuer.issue(1, 'user')}")
        self.assertEqual(identity, Identity(id=1, username="alice", role="user"))
        self.assertFalse(hasattr(identity, "password_hash"))
        self.users.find_by_id.assert_called_once_with(1)

    def test_role_comes_from_store_not_token(self) -> None:
        self.users.find_by_id.return_value = _user(role="admin")
        identity = self.resolver.resolve(f"Bearer {self.issuer.issue(1, 'user')}")
        self.assertEqual(identity.role, "admin")

    def test_resolving_twice_gives_equal_identity(self) -> None:
        header = f"Bearer {self.issuer.issue(1, 'user')}"
        self.assertEqual(self.resolver.resolve(header), self.resolver.resolve(header))

    def test_missing_header_is_no_token(self) -> None:
        self._assert_fails(None, AuthFailure.NO_TOKEN, NO_TOKEN_MESSAGE)
        self.users.find_by_id.assert_not_called()

    def test_non_bearer_header_is_no_token(self) -> None:
        token = self.issuer.issue(1, "user")
        self._assert_fails(f"Basic {token}", AuthFailure.NO_TOKEN, NO_TOKEN_MESSAGE)
        self.users.find_by_id.assert_not_called()

    def test_expired_token_is_invalid(self) -> None:
        token = self.issuer.issue(1, "user", now=datetime.now(UTC) - timedelta(days=31))
        self._assert_fails(f"Bearer {token}", AuthFailure.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
        self.users.find_by_id.assert_not_called()

    def test_tampered_token_is_invalid(self) -> None:
        token = self.issuer.issue(1, "user")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        self._assert_fails(f"Bearer {tampered}", AuthFailure.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)

    def test_garbage_token_is_invalid(self) -> None:
        self._assert_fails("Bearer not-a-jwt", AuthFailure.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)

    def test_token_from_other_secret_is_invalid(self) -> None:
        token = TokenIssuer("other-secret").issue(1, "user")
        self._assert_fails(f"Bearer {token}", AuthFailure.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)

    def test_deleted_user_looks_like_invalid_token(self) -> None:
        self.users.find_by_id.return_value = None
        token = self.issuer.issue(99, "user")
        self._assert_fails(f"Bearer {token}", AuthFailure.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
        self.users.find_by_id.assert_called_once_with(99)


if __name__ == "__main__":
    unittest.main()
