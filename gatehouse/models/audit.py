"""ORM model for the append-only project audit trail."""

from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String

from gatehouse.models.base import Base, JSONType, utcnow


class AuditAction(str, PyEnum):
    """Auditable mutations."""

    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    MEMBER_ADDED = "MEMBER_ADDED"


class AuditLog(Base):
    """
    Immutable audit entry, written in the same transaction as the mutation it
    records. Rows are never updated or deleted by the application.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    actor_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    action = Column(Enum(AuditAction, native_enum=False, length=32), nullable=False, index=True)
    entity = Column(String(64), nullable=False)
    entity_id = Column(String(64), nullable=True)
    details = Column(JSONType, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<AuditLog {self.action} by {self.actor_id} at {self.created_at}>"
