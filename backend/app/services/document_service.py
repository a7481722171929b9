"""Alta, consulta y edición de documentos (contenedores de versiones)."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.center import Center, Department
from app.models.document import Document
from app.models.user import User
from app.services import audit_service
from app.utils.errors import NotFoundError, ValidationError
from app.utils.helpers import to_naive_utc


def get_document(db: Session, document_id: int) -> Document:
    doc = db.query(Document).filter(Document.document_id == document_id).first()
    if not doc:
        raise NotFoundError("Documento no encontrado")
    return doc


def list_documents(
    db: Session,
    department_id: Optional[int] = None,
    center_id: Optional[int] = None,
) -> List[Document]:
    q = db.query(Document)
    if department_id is not None:
        q = q.filter(Document.department_id == department_id)
    if center_id is not None:
        q = q.filter(Document.center_id == center_id)
    return q.order_by(Document.created_at.desc(), Document.document_id.desc()).all()


def create_document(
    db: Session,
    *,
    name: str,
    doc_type: str,
    center_id: int,
    department_id: int,
    expiration_date: Optional[datetime],
    actor: User,
    ip_address: Optional[str] = None,
) -> Document:
    if not db.query(Center).filter(Center.center_id == center_id).first():
        raise ValidationError(f"El centro {center_id} no existe")
    if not db.query(Department).filter(Department.department_id == department_id).first():
        raise ValidationError(f"El departamento {department_id} no existe")

    doc = Document(
        name=name.strip(),
        doc_type=doc_type.strip(),
        center_id=center_id,
        department_id=department_id,
        current_version=1,
        expiration_date=to_naive_utc(expiration_date),
        created_by=actor.user_id,
    )
    db.add(doc)
    db.flush()
    audit_service.record(
        db,
        actor=actor,
        action="create",
        entity_type="document",
        entity_id=doc.document_id,
        entity_name=doc.name,
        details=f"Tipo: {doc.doc_type}",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(doc)
    return doc


def update_document(
    db: Session,
    document_id: int,
    changes: dict,
    *,
    actor: User,
    ip_address: Optional[str] = None,
) -> Document:
    doc = get_document(db, document_id)
    # Los avisos ya enviados no se rearman al mover la fecha de vencimiento.
    for key in ("name", "doc_type", "expiration_date"):
        if key not in changes:
            continue
        value = changes[key]
        if key == "expiration_date":
            value = to_naive_utc(value)
        else:
            if value is None or not value.strip():
                raise ValidationError(f"El campo '{key}' no puede quedar vacío")
            value = value.strip()
        setattr(doc, key, value)
    audit_service.record(
        db,
        actor=actor,
        action="update",
        entity_type="document",
        entity_id=doc.document_id,
        entity_name=doc.name,
        details="Campos: " + ", ".join(sorted(changes)) if changes else "Sin cambios",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(doc)
    return doc


def record_view(db: Session, doc: Document, *, actor: User, ip_address: Optional[str] = None) -> None:
    audit_service.record(
        db,
        actor=actor,
        action="view",
        entity_type="document",
        entity_id=doc.document_id,
        entity_name=doc.name,
        ip_address=ip_address,
    )
    db.commit()
