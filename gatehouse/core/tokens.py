"""JWT signing/verification for access and refresh tokens, and refresh-token hashing."""

import hashlib
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from gatehouse.core.config import Settings
from gatehouse.core.durations import parse_duration, refresh_ttl
from gatehouse.core.errors import ConfigurationError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class IssuedPair:
    """A freshly signed token pair plus the refresh token's absolute expiry."""

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime


class TokenCodec:
    """
    Signs and verifies bearer tokens.

    Access and refresh tokens use independent secrets and lifetimes, so a
    refresh token can never pass as an access token (and vice versa).
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=30),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ConfigurationError(
                "JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must both be set"
            )
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        """Build the codec from settings. Raises ConfigurationError if a secret is missing."""
        if settings.JWT_ACCESS_SECRET is None or settings.JWT_REFRESH_SECRET is None:
            raise ConfigurationError(
                "JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must both be set"
            )
        return cls(
            access_secret=settings.JWT_ACCESS_SECRET.get_secret_value(),
            refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
            access_ttl=parse_duration(settings.JWT_ACCESS_EXPIRES_IN),
            refresh_ttl=refresh_ttl(settings.JWT_REFRESH_EXPIRES_IN),
            algorithm=settings.JWT_ALGORITHM,
        )

    def now(self) -> datetime:
        return self._clock()

    def _sign(self, sub: str, email: str, token_type: str, expire: datetime, now: datetime) -> str:
        payload: dict[str, Any] = {
            "sub": sub,
            "email": email,
            "type": token_type,
            # Unique per token so two pairs issued in the same second differ.
            "jti": secrets.token_urlsafe(16),
            "iat": now,
            "exp": expire,
        }
        secret = self._access_secret if token_type == ACCESS_TOKEN_TYPE else self._refresh_secret
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def issue_pair(self, user_id: str, email: str) -> IssuedPair:
        """Sign a new access/refresh pair for the user."""
        now = self.now()
        refresh_expires_at = now + self.refresh_ttl
        access_token = self._sign(
            user_id, email, ACCESS_TOKEN_TYPE, now + self.access_ttl, now
        )
        refresh_token = self._sign(
            user_id, email, REFRESH_TOKEN_TYPE, refresh_expires_at, now
        )
        return IssuedPair(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_expires_at=refresh_expires_at,
        )

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate an access token; return its claims.
        Raises jwt.PyJWTError on invalid, expired or wrong-type tokens.
        """
        payload = jwt.decode(
            token,
            self._access_secret,
            algorithms=[self.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise jwt.InvalidTokenError("Not an access token")
        return payload

    def hash_refresh_token(self, raw_token: str) -> str:
        """
        Deterministic lookup key for a refresh token: sha256(token + refresh secret).

        The static secret acts as the salt so the same raw token always maps to
        the same stored hash.
        """
        return hashlib.sha256(
            (raw_token + self._refresh_secret).encode("utf-8")
        ).hexdigest()
