"""
Audit logging service
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.utils.json_serializer import sanitize_for_json


def log_audit(
    db: Session,
    actor: str,
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    meta: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Create an audit log entry

    Args:
        db: Database session
        actor: Token subject of the caller performing the action
        action: Action type (e.g., "ATTENDANCE_MANUAL_CREATE", "SCHEDULE_UPSERT")
        entity_type: Table of the affected entity (e.g., "attendance_records")
        entity_id: ID of the affected entity (optional)
        meta: Additional metadata as dictionary (optional)

    Returns:
        Created AuditLog instance
    """
    safe_meta = sanitize_for_json(meta) if meta is not None else None

    audit_log = AuditLog(
        actor=str(actor),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta_json=safe_meta,
        created_at=datetime.now(timezone.utc)
    )
    db.add(audit_log)
    db.commit()
    db.refresh(audit_log)
    return audit_log
