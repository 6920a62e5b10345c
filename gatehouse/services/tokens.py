"""Token lifecycle: registration, login, refresh-token rotation and logout."""

import logging
from datetime import UTC, datetime

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gatehouse.core.database import transaction
from gatehouse.core.errors import ConflictError, TransactionError, UnauthorizedError
from gatehouse.core.security import PasswordHasher
from gatehouse.core.tokens import IssuedPair, TokenCodec
from gatehouse.models import RefreshToken, User
from gatehouse.schemas.auth import AuthResponse, CurrentUser, TokenPair, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
INVALID_ACCESS_TOKEN = "Invalid or expired token"


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TokenService:
    """
    Issues, stores, verifies and rotates token pairs.

    Refresh tokens are single use: every successful refresh deletes the
    presented token's record in the same transaction that stores its
    replacement. Only a hash of each refresh token is persisted.
    """

    def __init__(self, session: Session, hasher: PasswordHasher, codec: TokenCodec) -> None:
        self.session = session
        self.hasher = hasher
        self.codec = codec

    def _store_refresh_token(self, user_id: str, pair: IssuedPair) -> None:
        self.session.add(
            RefreshToken(
                user_id=user_id,
                token_hash=self.codec.hash_refresh_token(pair.refresh_token),
                expires_at=pair.refresh_expires_at,
            )
        )

    def _auth_response(self, user: User, pair: IssuedPair) -> AuthResponse:
        return AuthResponse(
            user=UserPublic.model_validate(user),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            refresh_expires_at=pair.refresh_expires_at,
        )

    def register(self, email: str, password: str, name: str | None = None) -> AuthResponse:
        """Create an account and return it with a first token pair. Conflict if the email is taken."""
        existing = self.session.query(User).filter(User.email == email).first()
        if existing is not None:
            raise ConflictError("Email already in use")

        password_hash = self.hasher.hash(password)
        try:
            with transaction(self.session):
                user = User(email=email, name=name, password_hash=password_hash)
                self.session.add(user)
                self.session.flush()
                pair = self.codec.issue_pair(user.id, user.email)
                self._store_refresh_token(user.id, pair)
        except TransactionError as e:
            # Lost a race with a concurrent registration for the same email.
            if isinstance(e.__cause__, IntegrityError):
                raise ConflictError("Email already in use") from e
            raise

        logger.info("User registered", extra={"user_id": user.id})
        return self._auth_response(user, pair)

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Verify credentials and start a new session.

        All refresh tokens previously issued to the user are revoked: one live
        session per login.
        """
        user = self.session.query(User).filter(User.email == email).first()
        # An unknown email still pays for one Argon2 verification.
        password_ok = self.hasher.verify(password, user.password_hash if user else None)
        if user is None or not password_ok:
            logger.info("Login rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        with transaction(self.session):
            if self.hasher.needs_rehash(user.password_hash):
                user.password_hash = self.hasher.hash(password)
            revoked = (
                self.session.query(RefreshToken)
                .filter(RefreshToken.user_id == user.id)
                .delete(synchronize_session=False)
            )
            pair = self.codec.issue_pair(user.id, user.email)
            self._store_refresh_token(user.id, pair)

        logger.info(
            "User logged in",
            extra={"user_id": user.id, "revoked_refresh_tokens": revoked},
        )
        return self._auth_response(user, pair)

    def refresh(self, user_id: str, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair, consuming the presented token.

        Fails with UnauthorizedError when the token is unknown, already used,
        owned by someone else or expired. Expired records are deleted on sight.
        """
        token_hash = self.codec.hash_refresh_token(refresh_token)
        row = (
            self.session.query(RefreshToken)
            .filter(RefreshToken.token_hash == token_hash)
            .first()
        )
        if row is None or row.user_id != user_id:
            logger.info("Refresh rejected: unknown token", extra={"user_id": user_id})
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        if _as_utc(row.expires_at) <= self.codec.now():
            with transaction(self.session):
                self.session.query(RefreshToken).filter(
                    RefreshToken.token_hash == token_hash
                ).delete(synchronize_session=False)
            logger.info("Refresh rejected: token expired", extra={"user_id": user_id})
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        user = self.session.get(User, user_id)
        if user is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        with transaction(self.session):
            # Conditional delete: of two concurrent refreshes with the same
            # token, only the one that removes the row may issue a new pair.
            consumed = (
                self.session.query(RefreshToken)
                .filter(
                    RefreshToken.token_hash == token_hash,
                    RefreshToken.user_id == user_id,
                )
                .delete(synchronize_session=False)
            )
            if consumed != 1:
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)
            pair = self.codec.issue_pair(user.id, user.email)
            self._store_refresh_token(user.id, pair)

        logger.info("Refresh token rotated", extra={"user_id": user_id})
        return TokenPair(access_token=pair.access_token, refresh_token=pair.refresh_token)

    def logout(self, user_id: str, refresh_token: str) -> None:
        """Revoke one refresh token of the user. Unknown tokens are ignored."""
        token_hash = self.codec.hash_refresh_token(refresh_token)
        with transaction(self.session):
            revoked = (
                self.session.query(RefreshToken)
                .filter(
                    RefreshToken.token_hash == token_hash,
                    RefreshToken.user_id == user_id,
                )
                .delete(synchronize_session=False)
            )
        logger.info("User logged out", extra={"user_id": user_id, "revoked": revoked})

    def authenticate(self, access_token: str) -> CurrentUser:
        """Resolve the identity behind an access token. UnauthorizedError on any failure."""
        try:
            payload = self.codec.decode_access_token(access_token)
        except jwt.PyJWTError as e:
            raise UnauthorizedError(INVALID_ACCESS_TOKEN) from e

        user = self.session.get(User, str(payload["sub"]))
        if user is None:
            raise UnauthorizedError(INVALID_ACCESS_TOKEN)
        return CurrentUser(id=user.id, email=user.email)
