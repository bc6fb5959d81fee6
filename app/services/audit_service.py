"""
Audit trail for state-changing actions (clock-in/out, approvals, payroll, invoices, tasks)
"""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.utils.datetime_utils import now_utc
from app.utils.json_serializer import sanitize_for_json


def log_audit(
    db: Session,
    actor_id: int,
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    meta: Optional[Dict[str, Any]] = None,
    commit: bool = True,
) -> AuditLog:
    """
    Record one audit entry.

    action is an upper-case verb such as "CLOCK_IN" or "TASK_MOVE"; entity_type
    is the table name of the affected row. meta is made JSON-safe first
    (dates, Decimals and enums become strings).

    With commit=False the entry is only added to the session so it lands in
    the caller's transaction.
    """
    entry = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta_json=None if meta is None else sanitize_for_json(meta),
        created_at=now_utc(),
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    return entry
