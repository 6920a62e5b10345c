"""Auth endpoints (register, login, refresh, logout, me) and the bearer-token dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gatehouse.core.database import get_db
from gatehouse.core.errors import UnauthorizedError
from gatehouse.core.security import PasswordHasher
from gatehouse.core.tokens import TokenCodec
from gatehouse.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from gatehouse.services.tokens import TokenService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_token_codec(request: Request) -> TokenCodec:
    """Codec built once at startup (see gatehouse.main.lifespan)."""
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenService:
    return TokenService(db, hasher, codec)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Dependency: require a valid Bearer access token and return the caller's identity."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return service.authenticate(credentials.credentials)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Create an account and return it with an access/refresh token pair."""
    return service.register(body.email, body.password, body.name)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Authenticate with email and password. Revokes every earlier refresh token
    of the account. Send the access token as: Authorization: Bearer <access_token>
    """
    return service.login(body.email, body.password)


@router.post("/refresh", response_model=TokenPair)
def refresh(
    body: RefreshRequest,
    service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenPair:
    """Rotate a refresh token. The presented token cannot be used again."""
    return service.refresh(body.user_id, body.refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    body: LogoutRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[TokenService, Depends(get_token_service)],
) -> Response:
    service.logout(user.id, body.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=CurrentUser)
def me(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    return user
