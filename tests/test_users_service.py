"""Unit tests for micropost.services.users with a mocked credential store."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from micropost.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from micropost.core.security import TokenIssuer, hash_password
from micropost.services import users as user_service
from micropost.services.identity import Identity

ROOT = Identity(id=1, username="root", role="admin")


def _user(user_id: int = 5, username: str = "alice", password: str = "secret1", role: str = "user") -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id,
        username=username,
        role=role,
        password_hash=hash_password(password, rounds=4),
    )


class TestRegister(unittest.TestCase):
    def setUp(self) -> None:
        self.issuer = TokenIssuer("users-test-secret")
        self.store = MagicMock()

    def test_registers_ordinary_user(self) -> None:
        self.store.find_by_username.return_value = None
        self.store.create.side_effect = lambda username, password_hash, role: SimpleNamespace(
            id=5, username=username, password_hash=password_hash, role=role
        )
        result = user_service.register(self.store, self.issuer, "alice", "secret1", bcrypt_rounds=4)
        self.assertEqual(result.user.role, "user")
        self.assertNotEqual(result.user.password_hash, "secret1")
        self.assertEqual(self.issuer.decode(result.token)["sub"], "5")

    def test_duplicate_username(self) -> None:
        self.store.find_by_username.return_value = _user()
        with self.assertRaises(ConflictError) as ctx:
            user_service.register(self.store, self.issuer, "alice", "secret1", bcrypt_rounds=4)
        self.assertEqual(ctx.exception.status_code, 400)
        self.store.create.assert_not_called()

    def test_short_password_checked_before_store(self) -> None:
        with self.assertRaises(ValidationError):
            user_service.register(self.store, self.issuer, "alice", "123", bcrypt_rounds=4)
        self.store.find_by_username.assert_not_called()


class TestLogin(unittest.TestCase):
    def setUp(self) -> None:
        self.issuer = TokenIssuer("users-test-secret")
        self.store = MagicMock()

    def test_success(self) -> None:
        self.store.find_by_username.return_value = _user()
        result = user_service.login(self.store, self.issuer, "alice", "secret1")
        self.assertEqual(result.user.username, "alice")
        self.assertEqual(self.issuer.decode(result.token)["role"], "user")

    def test_unknown_user_and_wrong_password_are_distinct_401s(self) -> None:
        self.store.find_by_username.return_value = None
        with self.assertRaises(AuthenticationError) as unknown:
            user_service.login(self.store, self.issuer, "nobody", "secret1")
        self.store.find_by_username.return_value = _user()
        with self.assertRaises(AuthenticationError) as wrong:
            user_service.login(self.store, self.issuer, "alice", "secret2")
        self.assertEqual(unknown.exception.status_code, 401)
        self.assertEqual(wrong.exception.status_code, 401)
        self.assertNotEqual(unknown.exception.message, wrong.exception.message)


class TestAdminOperations(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MagicMock()

    def test_invalid_role_rejected_before_lookup(self) -> None:
        with self.assertRaises(ValidationError):
            user_service.change_role(self.store, 5, "hacker")
        self.store.find_by_id.assert_not_called()

    def test_change_role_saves(self) -> None:
        user = _user()
        self.store.find_by_id.return_value = user
        self.store.save.side_effect = lambda u: u
        updated = user_service.change_role(self.store, 5, "admin")
        self.assertEqual(updated.role, "admin")
        self.store.save.assert_called_once_with(user)

    def test_change_role_missing_user(self) -> None:
        self.store.find_by_id.return_value = None
        with self.assertRaises(NotFoundError):
            user_service.change_role(self.store, 5, "admin")

    def test_admin_cannot_delete_self(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            user_service.delete_user(self.store, ROOT, ROOT.id)
        self.assertEqual(ctx.exception.status_code, 400)
        self.store.delete.assert_not_called()

    def test_delete_other_user(self) -> None:
        user = _user()
        self.store.find_by_id.return_value = user
        user_service.delete_user(self.store, ROOT, user.id)
        self.store.delete.assert_called_once_with(user)


if __name__ == "__main__":
    unittest.main()
