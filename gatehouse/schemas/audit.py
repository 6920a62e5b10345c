"""Typed audit details, one model per AuditAction, discriminated on `action`."""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from gatehouse.models.audit import AuditAction
from gatehouse.models.project import ProjectRole


class ProjectCreatedDetails(BaseModel):
    action: Literal["PROJECT_CREATED"] = "PROJECT_CREATED"
    name: str
    description: str | None = None


class ProjectChanges(BaseModel):
    """Fields actually applied by an update; absent fields were not touched."""

    name: str | None = None
    description: str | None = None


class ProjectUpdatedDetails(BaseModel):
    action: Literal["PROJECT_UPDATED"] = "PROJECT_UPDATED"
    changes: ProjectChanges


class MemberAddedDetails(BaseModel):
    action: Literal["MEMBER_ADDED"] = "MEMBER_ADDED"
    added_user_id: str
    email: str
    role: ProjectRole


AuditDetails = Annotated[
    Union[ProjectCreatedDetails, ProjectUpdatedDetails, MemberAddedDetails],
    Field(discriminator="action"),
]


class AuditEntryOut(BaseModel):
    """Audit entry as returned to project members."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: str | None = None
    actor_id: str
    action: AuditAction
    entity: str
    entity_id: str | None = None
    details: AuditDetails | None = None
    created_at: datetime
