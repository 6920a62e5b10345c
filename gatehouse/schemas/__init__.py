"""Pydantic request/response schemas."""

from gatehouse.schemas.audit import (
    AuditDetails,
    AuditEntryOut,
    MemberAddedDetails,
    ProjectCreatedDetails,
    ProjectUpdatedDetails,
)
from gatehouse.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserPublic,
)
from gatehouse.schemas.health import HealthResponse
from gatehouse.schemas.projects import (
    AddMemberRequest,
    CreateProjectRequest,
    MemberOut,
    ProjectOut,
    ProjectWithRole,
    UpdateProjectRequest,
)

__all__ = [
    "AddMemberRequest",
    "AuditDetails",
    "AuditEntryOut",
    "AuthResponse",
    "CreateProjectRequest",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LogoutRequest",
    "MemberAddedDetails",
    "MemberOut",
    "ProjectCreatedDetails",
    "ProjectOut",
    "ProjectUpdatedDetails",
    "ProjectWithRole",
    "RefreshRequest",
    "RegisterRequest",
    "TokenPair",
    "UserPublic",
]
