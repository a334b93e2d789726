"""Module: audit."""

import uuid

from sqlalchemy.orm import Session

from groomdesk.core.access import SessionContext
from groomdesk.db.models.audit_log import AdminAuditLog


def record_admin_action(
    db: Session,
    ctx: SessionContext,
    action: str,
    table_name: str,
    record_id: uuid.UUID | None,
    old_values: dict | None = None,
    new_values: dict | None = None,
) -> None:
    # Added to the caller's unit of work; committed together with the change itself.
    db.add(
        AdminAuditLog(
            admin_id=ctx.user_id,
            action=action,
            table_name=table_name,
            record_id=str(record_id) if record_id else None,
            old_values=old_values,
            new_values=new_values,
        )
    )
