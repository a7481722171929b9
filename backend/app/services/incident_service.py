"""Incidencias: alta manual o automática y resolución por un revisor."""

from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.center import Center
from app.models.document import Document
from app.models.incident import INCIDENT_STATUSES, INCIDENT_TYPES, Incident
from app.models.user import User
from app.services import audit_service
from app.utils.errors import InvalidStateError, NotFoundError, ValidationError


ALLOWED_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "pending": ("approved", "rejected", "closed"),
    "approved": ("closed",),
    "rejected": ("closed",),
    "closed": (),
}


def get_incident(db: Session, incident_id: int) -> Incident:
    row = db.query(Incident).filter(Incident.incident_id == incident_id).first()
    if not row:
        raise NotFoundError("Incidencia no encontrada")
    return row


def list_incidents(
    db: Session,
    status: Optional[str] = None,
    incident_type: Optional[str] = None,
) -> List[Incident]:
    q = db.query(Incident)
    if status:
        q = q.filter(Incident.status == status)
    if incident_type:
        q = q.filter(Incident.incident_type == incident_type)
    return q.order_by(Incident.created_at.desc(), Incident.incident_id.desc()).all()


def build_incident(
    *,
    incident_type: str,
    title: str,
    description: str,
    center_id: Optional[int] = None,
    document_id: Optional[int] = None,
    created_by: Optional[int] = None,
    created_by_name: Optional[str] = None,
    assigned_to: Optional[int] = None,
) -> Incident:
    if incident_type not in INCIDENT_TYPES:
        raise ValidationError(f"Tipo de incidencia no válido: {incident_type}")
    return Incident(
        incident_type=incident_type,
        status="pending",
        title=title,
        description=description,
        center_id=center_id,
        document_id=document_id,
        created_by=created_by,
        created_by_name=created_by_name,
        assigned_to=assigned_to,
    )


def create_incident(
    db: Session,
    *,
    actor: User,
    incident_type: str,
    title: str,
    description: str,
    center_id: Optional[int] = None,
    document_id: Optional[int] = None,
    assigned_to: Optional[int] = None,
    ip_address: Optional[str] = None,
) -> Incident:
    if center_id is not None and not db.query(Center).filter(Center.center_id == center_id).first():
        raise ValidationError(f"El centro {center_id} no existe")
    if document_id is not None and not db.query(Document).filter(Document.document_id == document_id).first():
        raise ValidationError(f"El documento {document_id} no existe")
    if assigned_to is not None and not db.query(User).filter(User.user_id == assigned_to, User.is_active == True).first():
        raise ValidationError(f"El usuario asignado {assigned_to} no existe o está inactivo")

    row = build_incident(
        incident_type=incident_type,
        title=title,
        description=description,
        center_id=center_id,
        document_id=document_id,
        created_by=actor.user_id,
        created_by_name=actor.full_name,
        assigned_to=assigned_to,
    )
    db.add(row)
    db.flush()
    audit_service.record(
        db,
        actor=actor,
        action="create",
        entity_type="incident",
        entity_id=row.incident_id,
        entity_name=row.title,
        details=f"Tipo: {row.incident_type}",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(row)
    return row


def resolve_incident(
    db: Session,
    incident_id: int,
    *,
    actor: User,
    status: str,
    resolution_comment: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> Incident:
    if status not in INCIDENT_STATUSES:
        raise ValidationError(f"Estado de incidencia no válido: {status}")
    row = get_incident(db, incident_id)
    previous = row.status
    if status not in ALLOWED_TRANSITIONS.get(previous, ()):
        raise InvalidStateError(f"No se puede pasar de '{previous}' a '{status}'")

    changed = (
        db.query(Incident)
        .filter(Incident.incident_id == incident_id, Incident.status == previous)
        .update(
            {
                Incident.status: status,
                Incident.resolved_by: actor.user_id,
                Incident.resolution_comment: resolution_comment,
            },
            synchronize_session=False,
        )
    )
    if not changed:
        db.rollback()
        raise InvalidStateError("La incidencia cambió de estado mientras se resolvía")

    audit_service.record(
        db,
        actor=actor,
        action="resolve",
        entity_type="incident",
        entity_id=row.incident_id,
        entity_name=row.title,
        details=f"Estado: {previous} -> {status}",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(row)
    return row
