"""Unit tests for gatehouse.core.tokens.TokenCodec: signing, verification, hashing, config."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from gatehouse.core.config import Settings
from gatehouse.core.errors import ConfigurationError
from gatehouse.core.tokens import TokenCodec
from tests.support import ACCESS_SECRET, REFRESH_SECRET, make_codec


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_ACCESS_SECRET": SecretStr(ACCESS_SECRET),
        "JWT_REFRESH_SECRET": SecretStr(REFRESH_SECRET),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestIssuePair(unittest.TestCase):
    def setUp(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        self.codec = make_codec(clock=lambda: self.now)

    def test_claims_and_independent_expiries(self) -> None:
        pair = self.codec.issue_pair("user-1", "a@x.com")
        access = jwt.decode(
            pair.access_token, ACCESS_SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        refresh = jwt.decode(
            pair.refresh_token, REFRESH_SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        self.assertEqual(access["sub"], "user-1")
        self.assertEqual(access["email"], "a@x.com")
        self.assertEqual(access["type"], "access")
        self.assertEqual(refresh["type"], "refresh")
        self.assertEqual(access["exp"] - access["iat"], 15 * 60)
        self.assertEqual(refresh["exp"] - refresh["iat"], 30 * 24 * 60 * 60)

    def test_refresh_expiry_matches_signed_claim(self) -> None:
        pair = self.codec.issue_pair("user-1", "a@x.com")
        refresh = jwt.decode(
            pair.refresh_token, REFRESH_SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        self.assertEqual(pair.refresh_expires_at, self.now + timedelta(days=30))
        self.assertEqual(refresh["exp"], int(pair.refresh_expires_at.timestamp()))

    def test_pairs_issued_in_same_instant_differ(self) -> None:
        p1 = self.codec.issue_pair("user-1", "a@x.com")
        p2 = self.codec.issue_pair("user-1", "a@x.com")
        self.assertNotEqual(p1.access_token, p2.access_token)
        self.assertNotEqual(p1.refresh_token, p2.refresh_token)

    def test_tokens_signed_with_different_secrets(self) -> None:
        pair = self.codec.issue_pair("user-1", "a@x.com")
        with self.assertRaises(jwt.InvalidSignatureError):
            jwt.decode(pair.refresh_token, ACCESS_SECRET, algorithms=["HS256"])


class TestDecodeAccessToken(unittest.TestCase):
    def test_valid_access_token(self) -> None:
        codec = make_codec()
        pair = codec.issue_pair("user-1", "a@x.com")
        self.assertEqual(codec.decode_access_token(pair.access_token)["sub"], "user-1")

    def test_refresh_token_is_not_an_access_token(self) -> None:
        codec = make_codec()
        pair = codec.issue_pair("user-1", "a@x.com")
        with self.assertRaises(jwt.PyJWTError):
            codec.decode_access_token(pair.refresh_token)

    def test_expired_access_token(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=1)
        codec = make_codec(clock=lambda: past)
        pair = codec.issue_pair("user-1", "a@x.com")
        with self.assertRaises(jwt.ExpiredSignatureError):
            codec.decode_access_token(pair.access_token)

    def test_tampered_token(self) -> None:
        codec = make_codec()
        pair = codec.issue_pair("user-1", "a@x.com")
        with self.assertRaises(jwt.PyJWTError):
            codec.decode_access_token(pair.access_token[:-2] + "xx")


class TestHashRefreshToken(unittest.TestCase):
    def test_deterministic_and_secret_dependent(self) -> None:
        codec = make_codec()
        other = TokenCodec(access_secret=ACCESS_SECRET, refresh_secret="another-secret")
        h = codec.hash_refresh_token("raw-token")
        self.assertEqual(h, codec.hash_refresh_token("raw-token"))
        self.assertEqual(len(h), 64)
        self.assertNotEqual(h, other.hash_refresh_token("raw-token"))
        self.assertNotEqual(h, codec.hash_refresh_token("raw-token2"))


class TestFromSettings(unittest.TestCase):
    def test_missing_secrets_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError):
            TokenCodec.from_settings(_settings(JWT_ACCESS_SECRET=None))
        with self.assertRaises(ConfigurationError):
            TokenCodec.from_settings(_settings(JWT_REFRESH_SECRET=SecretStr("   ")))

    def test_empty_secret_in_constructor_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError):
            TokenCodec(access_secret="", refresh_secret=REFRESH_SECRET)

    def test_durations_from_settings(self) -> None:
        codec = TokenCodec.from_settings(
            _settings(JWT_ACCESS_EXPIRES_IN="5m", JWT_REFRESH_EXPIRES_IN="7d")
        )
        self.assertEqual(codec.access_ttl, timedelta(minutes=5))
        self.assertEqual(codec.refresh_ttl, timedelta(days=7))

    def test_unparseable_refresh_duration_falls_back(self) -> None:
        with self.assertLogs("gatehouse.core.durations", level="WARNING"):
            codec = TokenCodec.from_settings(_settings(JWT_REFRESH_EXPIRES_IN="forever"))
        self.assertEqual(codec.refresh_ttl, timedelta(days=30))

    def test_invalid_access_duration_rejected_by_settings(self) -> None:
        with self.assertRaises(ValueError):
            _settings(JWT_ACCESS_EXPIRES_IN="soon")


if __name__ == "__main__":
    unittest.main()
