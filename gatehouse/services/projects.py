"""Project authorization: per-project role checks with a transactional audit trail."""

import logging

from sqlalchemy.orm import Session

from gatehouse.core.database import transaction
from gatehouse.core.errors import ForbiddenError, NotFoundError
from gatehouse.models import AuditLog, Project, ProjectMember, ProjectRole, User
from gatehouse.schemas.audit import (
    AuditEntryOut,
    MemberAddedDetails,
    ProjectChanges,
    ProjectCreatedDetails,
    ProjectUpdatedDetails,
)
from gatehouse.schemas.projects import (
    MemberOut,
    ProjectOut,
    ProjectWithRole,
    UpdateProjectRequest,
)
from gatehouse.services.audit import record_audit

logger = logging.getLogger(__name__)

AUDIT_PAGE_SIZE = 100

# Roles allowed to edit project metadata. Membership management is ADMIN only.
PROJECT_EDITOR_ROLES = frozenset({ProjectRole.ADMIN, ProjectRole.EDITOR})


def _with_role(project: Project, role: ProjectRole) -> ProjectWithRole:
    return ProjectWithRole(
        id=project.id,
        name=project.name,
        description=project.description,
        created_at=project.created_at,
        updated_at=project.updated_at,
        role=role,
    )


class ProjectService:
    """
    Role-gated project operations.

    Every mutation and its audit entry are written in one transaction. Missing
    membership is reported as ForbiddenError everywhere, so callers cannot
    probe which projects exist.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_role(self, project_id: str, user_id: str) -> ProjectRole:
        """Role of the user on the project; ForbiddenError if not a member."""
        member = (
            self.session.query(ProjectMember)
            .filter(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
            .first()
        )
        if member is None:
            raise ForbiddenError("Not a project member")
        return member.role

    def create_project(
        self, actor_id: str, name: str, description: str | None = None
    ) -> ProjectOut:
        """Create a project with the actor as its first ADMIN."""
        with transaction(self.session):
            project = Project(name=name, description=description)
            self.session.add(project)
            self.session.flush()
            self.session.add(
                ProjectMember(
                    project_id=project.id,
                    user_id=actor_id,
                    role=ProjectRole.ADMIN,
                )
            )
            record_audit(
                self.session,
                actor_id=actor_id,
                project_id=project.id,
                entity="Project",
                entity_id=project.id,
                details=ProjectCreatedDetails(name=name, description=description),
            )

        logger.info(
            "Project created",
            extra={"project_id": project.id, "actor_id": actor_id},
        )
        return ProjectOut.model_validate(project)

    def list_my_projects(self, user_id: str) -> list[ProjectWithRole]:
        """Projects the user belongs to, most recently joined first."""
        rows = (
            self.session.query(ProjectMember, Project)
            .join(Project, Project.id == ProjectMember.project_id)
            .filter(ProjectMember.user_id == user_id)
            .order_by(ProjectMember.created_at.desc(), ProjectMember.id.desc())
            .all()
        )
        return [_with_role(project, member.role) for member, project in rows]

    def get_project_if_member(self, project_id: str, user_id: str) -> ProjectWithRole:
        row = (
            self.session.query(ProjectMember, Project)
            .join(Project, Project.id == ProjectMember.project_id)
            .filter(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
            .first()
        )
        if row is None:
            raise ForbiddenError("Not a project member")
        member, project = row
        return _with_role(project, member.role)

    def update_project(
        self, project_id: str, user_id: str, patch: UpdateProjectRequest
    ) -> ProjectOut:
        """
        Apply the provided, non-null fields of the patch. ADMIN or EDITOR only.

        The audit entry records exactly the fields that were applied.
        """
        role = self.get_role(project_id, user_id)
        if role not in PROJECT_EDITOR_ROLES:
            raise ForbiddenError("Insufficient permissions")

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        with transaction(self.session):
            project = self.session.get(Project, project_id)
            if project is None:
                raise NotFoundError("Project not found")
            for field, value in changes.items():
                setattr(project, field, value)
            record_audit(
                self.session,
                actor_id=user_id,
                project_id=project_id,
                entity="Project",
                entity_id=project_id,
                details=ProjectUpdatedDetails(changes=ProjectChanges(**changes)),
            )

        logger.info(
            "Project updated",
            extra={"project_id": project_id, "actor_id": user_id, "fields": sorted(changes)},
        )
        return ProjectOut.model_validate(project)

    def add_member(
        self, project_id: str, actor_id: str, email: str, role: ProjectRole
    ) -> MemberOut:
        """
        Add a user to the project, or change their role if already a member.
        ADMIN only; NotFoundError if no account has that email.
        """
        actor_role = self.get_role(project_id, actor_id)
        if actor_role != ProjectRole.ADMIN:
            raise ForbiddenError("Admin required")

        user = self.session.query(User).filter(User.email == email).first()
        if user is None:
            raise NotFoundError("User not found")

        with transaction(self.session):
            member = (
                self.session.query(ProjectMember)
                .filter(
                    ProjectMember.project_id == project_id,
                    ProjectMember.user_id == user.id,
                )
                .first()
            )
            if member is None:
                member = ProjectMember(project_id=project_id, user_id=user.id, role=role)
                self.session.add(member)
            else:
                member.role = role
            self.session.flush()
            record_audit(
                self.session,
                actor_id=actor_id,
                project_id=project_id,
                entity="ProjectMember",
                entity_id=str(member.id),
                details=MemberAddedDetails(added_user_id=user.id, email=email, role=role),
            )

        logger.info(
            "Project member added",
            extra={
                "project_id": project_id,
                "actor_id": actor_id,
                "member_user_id": user.id,
                "role": role.value,
            },
        )
        return MemberOut.model_validate(member)

    def list_audit(self, project_id: str, user_id: str) -> list[AuditEntryOut]:
        """Latest audit entries of the project, newest first. Any member may read."""
        self.get_role(project_id, user_id)
        entries = (
            self.session.query(AuditLog)
            .filter(AuditLog.project_id == project_id)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(AUDIT_PAGE_SIZE)
            .all()
        )
        return [AuditEntryOut.model_validate(e) for e in entries]
