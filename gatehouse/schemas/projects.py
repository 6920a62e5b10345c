"""Request/response schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from gatehouse.models.project import ProjectRole


class CreateProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)


class UpdateProjectRequest(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)


class AddMemberRequest(BaseModel):
    email: EmailStr
    role: ProjectRole = Field(..., description="READER, EDITOR or ADMIN")


class ProjectOut(BaseModel):
    """Project projection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ProjectWithRole(ProjectOut):
    """Project annotated with the caller's role."""

    role: ProjectRole


class MemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: str
    user_id: str
    role: ProjectRole
    created_at: datetime
