"""Project endpoints. Authorization and auditing happen in ProjectService."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gatehouse.api.v1.auth import get_current_user
from gatehouse.core.database import get_db
from gatehouse.schemas.audit import AuditEntryOut
from gatehouse.schemas.auth import CurrentUser
from gatehouse.schemas.projects import (
    AddMemberRequest,
    CreateProjectRequest,
    MemberOut,
    ProjectOut,
    ProjectWithRole,
    UpdateProjectRequest,
)
from gatehouse.services.projects import ProjectService

router = APIRouter()


def get_project_service(db: Annotated[Session, Depends(get_db)]) -> ProjectService:
    return ProjectService(db)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    body: CreateProjectRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectOut:
    """Create a project; the caller becomes its first ADMIN."""
    return service.create_project(user.id, body.name, body.description)


@router.get("", response_model=list[ProjectWithRole])
def list_my_projects(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> list[ProjectWithRole]:
    return service.list_my_projects(user.id)


@router.get("/{project_id}", response_model=ProjectWithRole)
def get_project(
    project_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectWithRole:
    return service.get_project_if_member(project_id, user.id)


@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: str,
    body: UpdateProjectRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectOut:
    """Update name and/or description (ADMIN or EDITOR)."""
    return service.update_project(project_id, user.id, body)


@router.post("/{project_id}/members", response_model=MemberOut)
def add_member(
    project_id: str,
    body: AddMemberRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> MemberOut:
    """Add a member or change an existing member's role (ADMIN only)."""
    return service.add_member(project_id, user.id, body.email, body.role)


@router.get("/{project_id}/audit", response_model=list[AuditEntryOut])
def list_audit(
    project_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> list[AuditEntryOut]:
    """Most recent 100 audit entries, newest first (any member)."""
    return service.list_audit(project_id, user.id)
