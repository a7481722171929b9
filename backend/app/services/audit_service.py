"""Registro inmutable de acciones que modifican el estado del sistema.

Las entradas se agregan a la sesión del llamador y se confirman junto con la
acción que describen, de modo que nunca existe una acción sin su registro ni
un registro sin su acción.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.models.user import User


def record(
    db: Session,
    *,
    actor: Optional[User],
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    entity_name: Optional[str] = None,
    details: Optional[str] = None,
    ip_address: Optional[str] = None,
    actor_name: Optional[str] = None,
) -> AuditLog:
    entry = AuditLog(
        user_id=actor.user_id if actor else None,
        user_name=actor.full_name if actor else actor_name,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        details=details,
        ip_address=ip_address,
    )
    db.add(entry)
    return entry


def list_audit_logs(db: Session, limit: Optional[int] = None) -> List[AuditLog]:
    q = db.query(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.log_id.desc())
    if limit:
        q = q.limit(limit)
    return q.all()
