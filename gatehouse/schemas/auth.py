"""Request/response schemas for auth endpoints and the token lifecycle service."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from gatehouse.core.config import settings


class RegisterRequest(BaseModel):
    """Credentials and optional display name for a new account."""

    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(
        ...,
        min_length=settings.PASSWORD_MIN_LEN,
        max_length=settings.PASSWORD_MAX_LEN,
        description="Password",
    )
    name: str | None = Field(default=None, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, max_length=settings.PASSWORD_MAX_LEN)
    # Second factor is not implemented; accepted so the request shape stays stable.
    otp: str | None = Field(default=None, description="One-time code (reserved)")


class RefreshRequest(BaseModel):
    """Refresh token presented for rotation, with the identity it claims to belong to."""

    user_id: str = Field(..., min_length=1, max_length=36)
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    """Refresh token to revoke."""

    refresh_token: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    """User projection safe to return to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    created_at: datetime | None = None


class TokenPair(BaseModel):
    """Rotated token pair returned by refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token (single use)")
    token_type: str = Field(default="bearer", description="Token type")


class AuthResponse(TokenPair):
    """Result of register and login."""

    user: UserPublic
    refresh_expires_at: datetime


class CurrentUser(BaseModel):
    """Authenticated identity passed explicitly into every service call."""

    id: str
    email: str
