"""SQLAlchemy ORM models."""

from gatehouse.models.audit import AuditAction, AuditLog
from gatehouse.models.base import Base
from gatehouse.models.project import Project, ProjectMember, ProjectRole
from gatehouse.models.refresh_token import RefreshToken
from gatehouse.models.user import User

__all__ = [
    "AuditAction",
    "AuditLog",
    "Base",
    "Project",
    "ProjectMember",
    "ProjectRole",
    "RefreshToken",
    "User",
]
