"""Unit tests for micropost.core.security: bcrypt password hashing and the JWT token issuer."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from micropost.core.errors import ConfigError
from micropost.core.security import TokenIssuer, hash_password, verify_password

SECRET = "unit-test-secret"


class TestPasswordHashing(unittest.TestCase):
    """hash_password produces salted bcrypt digests; verify_password never raises."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        digest = hash_password("secret1", rounds=4)
        self.assertNotEqual(digest, "secret1")
        self.assertTrue(digest.startswith("$2"))
        self.assertTrue(verify_password("secret1", digest))

    def test_wrong_password_does_not_verify(self) -> None:
        digest = hash_password("secret1", rounds=4)
        self.assertFalse(verify_password("secret2", digest))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("secret1", rounds=4), hash_password("secret1", rounds=4))

    def test_malformed_digest_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", ""))
        self.assertFalse(verify_password("secret1", None))


class TestTokenIssuerConfig(unittest.TestCase):
    """An absent signing secret is a configuration error, raised at construction."""

    def test_empty_secret_raises(self) -> None:
        for secret in (None, "", "   "):
            with self.subTest(secret=secret):
                with self.assertRaises(ConfigError):
                    TokenIssuer(secret)


class TestTokenIssuer(unittest.TestCase):
    """issue/decode round trip, claims, determinism and expiry."""

    def setUp(self) -> None:
        self.issuer = TokenIssuer(SECRET)

    def test_claims(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        payload = self.issuer.decode(self.issuer.issue(7, "admin", now=now))
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(payload["iat"], int(now.timestamp()))
        self.assertEqual(payload["exp"] - payload["iat"], int(timedelta(days=30).total_seconds()))

    def test_deterministic_for_same_inputs_and_timestamp(self) -> None:
        now = datetime.now(UTC)
        self.assertEqual(self.issuer.issue(1, "user", now=now), self.issuer.issue(1, "user", now=now))

    def test_differs_across_timestamps(self) -> None:
        now = datetime.now(UTC)
        self.assertNotEqual(
            self.issuer.issue(1, "user", now=now),
            self.issuer.issue(1, "user", now=now - timedelta(seconds=5)),
        )

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=31)
        token = self.issuer.issue(1, "user", now=issued)
        with self.assertRaises(jwt.ExpiredSignatureError):
            self.issuer.decode(token)

    def test_token_still_valid_just_inside_window(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=29, hours=23)
        payload = self.issuer.decode(self.issuer.issue(1, "user", now=issued))
        self.assertEqual(payload["sub"], "1")

    def test_other_secret_rejected(self) -> None:
        token = TokenIssuer("another-secret").issue(1, "user")
        with self.assertRaises(jwt.InvalidSignatureError):
            self.issuer.decode(token)

    def test_token_without_subject_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"role": "admin", "iat": now, "exp": now + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(jwt.MissingRequiredClaimError):
            self.issuer.decode(token)


if __name__ == "__main__":
    unittest.main()
