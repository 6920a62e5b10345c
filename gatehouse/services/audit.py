"""Audit trail helper: builds AuditLog rows from typed details."""

from sqlalchemy.orm import Session

from gatehouse.models import AuditAction, AuditLog
from gatehouse.schemas.audit import AuditDetails


def record_audit(
    session: Session,
    *,
    actor_id: str,
    project_id: str | None,
    entity: str,
    entity_id: str | None,
    details: AuditDetails,
) -> AuditLog:
    """
    Add an audit entry to the session. The caller commits it together with the
    mutation it describes (inside gatehouse.core.database.transaction).

    The row's action always comes from the details model, so the stored action
    and payload cannot disagree.
    """
    # Only fields the caller set are stored; an explicit None stays as null.
    payload = details.model_dump(mode="json", exclude_unset=True)
    payload["action"] = details.action
    entry = AuditLog(
        project_id=project_id,
        actor_id=actor_id,
        action=AuditAction(details.action),
        entity=entity,
        entity_id=entity_id,
        details=payload,
    )
    session.add(entry)
    return entry
