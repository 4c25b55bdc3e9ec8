from flask import g
from folio.extensions import db
from folio.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None,
    actor_id: Optional[str] = None,
):
    if actor_id is None:
        current_user = getattr(g, "current_user", None)
        actor_id = current_user.id if current_user is not None else None

    log = AuditLog()

    log.actor_id = str(actor_id) if actor_id is not None else None
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id)
    log.payload = payload or {}

    db.session.add(log)
