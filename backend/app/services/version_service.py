"""Motor de aprobación de versiones de documentos.

Cada versión nace ``pending`` y sale de ese estado exactamente una vez, hacia
``approved`` o ``rejected``. La transición se aplica con un UPDATE condicionado
al estado ``pending``, por lo que dos revisores concurrentes no pueden decidir
la misma versión. Aprobar una versión adelanta ``Document.current_version``
sólo si el número nuevo es mayor que el actual; ambas escrituras y su registro
de auditoría se confirman en la misma transacción.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.document import APPROVED, PENDING, REJECTED, Document, DocumentVersion
from app.models.user import User
from app.services import audit_service
from app.services.document_service import get_document
from app.utils.errors import InvalidStateError, NotFoundError, StoreError, ValidationError
from app.utils.helpers import utcnow

logger = logging.getLogger(__name__)

CREATE_ATTEMPTS = 3


def _validate_reason(reason: Optional[str], label: str) -> str:
    # Se guarda tal cual se recibió; sólo se rechaza si es corto o está en blanco.
    text = reason or ""
    if len(text) < settings.MIN_REASON_LENGTH or not text.strip():
        raise ValidationError(
            f"{label} debe tener al menos {settings.MIN_REASON_LENGTH} caracteres"
        )
    return text


def get_version(db: Session, version_id: int) -> DocumentVersion:
    row = db.query(DocumentVersion).filter(DocumentVersion.version_id == version_id).first()
    if not row:
        raise NotFoundError("Versión no encontrada")
    return row


def create_version(
    db: Session,
    *,
    document_id: int,
    change_reason: str,
    uploaded_by: User,
    file_name: Optional[str] = None,
    file_size: Optional[int] = None,
    mime_type: Optional[str] = None,
    file_path: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> DocumentVersion:
    doc = get_document(db, document_id)
    reason = _validate_reason(change_reason, "El motivo del cambio")

    # El número se asigna en el servidor; la restricción única resuelve carreras.
    for attempt in range(1, CREATE_ATTEMPTS + 1):
        current_max = (
            db.query(func.max(DocumentVersion.version))
            .filter(DocumentVersion.document_id == doc.document_id)
            .scalar()
        )
        row = DocumentVersion(
            document_id=doc.document_id,
            version=(current_max or 0) + 1,
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
            file_path=file_path,
            change_reason=reason,
            approval_status=PENDING,
            uploaded_by=uploaded_by.user_id,
            uploaded_at=utcnow(),
        )
        db.add(row)
        audit_service.record(
            db,
            actor=uploaded_by,
            action="version",
            entity_type="document",
            entity_id=doc.document_id,
            entity_name=doc.name,
            details=f"Nueva versión {row.version}: {reason}",
            ip_address=ip_address,
        )
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "[versions] El número de versión %s ya existe en el documento %s (intento %d)",
                row.version, document_id, attempt,
            )
            continue
        db.refresh(row)
        logger.info("[versions] Documento %s: versión %s creada como pendiente", document_id, row.version)
        return row

    raise StoreError("No se pudo asignar un número de versión")


def _decide(
    db: Session,
    version_id: int,
    *,
    new_status: str,
    reviewer: User,
    rejection_reason: Optional[str] = None,
) -> DocumentVersion:
    row = get_version(db, version_id)
    values = {
        DocumentVersion.approval_status: new_status,
        DocumentVersion.approved_by: reviewer.user_id,
        DocumentVersion.approved_at: utcnow(),
    }
    if new_status == REJECTED:
        values[DocumentVersion.rejection_reason] = rejection_reason

    changed = (
        db.query(DocumentVersion)
        .filter(
            DocumentVersion.version_id == version_id,
            DocumentVersion.approval_status == PENDING,
        )
        .update(values, synchronize_session=False)
    )
    if not changed:
        db.rollback()
        db.refresh(row)
        raise InvalidStateError(
            f"La versión {row.version} ya fue resuelta ({row.approval_status})"
        )
    return row


def approve_version(
    db: Session,
    version_id: int,
    *,
    approver: User,
    ip_address: Optional[str] = None,
) -> DocumentVersion:
    row = _decide(db, version_id, new_status=APPROVED, reviewer=approver)

    # Aprobar una versión antigua nunca retrocede el puntero.
    db.query(Document).filter(
        Document.document_id == row.document_id,
        Document.current_version < row.version,
    ).update({Document.current_version: row.version}, synchronize_session=False)

    audit_service.record(
        db,
        actor=approver,
        action="approve",
        entity_type="document",
        entity_id=row.document_id,
        entity_name=row.document.name,
        details=f"Versión {row.version} aprobada",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(row)
    logger.info("[versions] Versión %s aprobada por el usuario %s", version_id, approver.user_id)
    return row


def reject_version(
    db: Session,
    version_id: int,
    *,
    reviewer: User,
    reason: str,
    ip_address: Optional[str] = None,
) -> DocumentVersion:
    get_version(db, version_id)
    text = _validate_reason(reason, "El motivo de rechazo")
    row = _decide(db, version_id, new_status=REJECTED, reviewer=reviewer, rejection_reason=text)
    audit_service.record(
        db,
        actor=reviewer,
        action="reject",
        entity_type="document",
        entity_id=row.document_id,
        entity_name=row.document.name,
        details=f"Versión {row.version} rechazada: {text}",
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(row)
    logger.info("[versions] Versión %s rechazada por el usuario %s", version_id, reviewer.user_id)
    return row


def list_document_versions(db: Session, document_id: int, show_all: bool = False) -> List[DocumentVersion]:
    get_document(db, document_id)
    q = db.query(DocumentVersion).filter(DocumentVersion.document_id == document_id)
    if not show_all:
        q = q.filter(DocumentVersion.approval_status == APPROVED)
    return q.order_by(DocumentVersion.version.desc()).all()


def list_by_status(db: Session, status: str, department_id: Optional[int] = None) -> List[DocumentVersion]:
    q = (
        db.query(DocumentVersion)
        .join(Document, Document.document_id == DocumentVersion.document_id)
        .filter(DocumentVersion.approval_status == status)
    )
    if department_id is not None:
        q = q.filter(Document.department_id == department_id)
    if status == APPROVED:
        q = q.order_by(DocumentVersion.approved_at.desc(), DocumentVersion.version_id.desc())
    else:
        q = q.order_by(DocumentVersion.uploaded_at.desc(), DocumentVersion.version_id.desc())
    return q.all()


def get_current_version(db: Session, document_id: int) -> DocumentVersion:
    doc = get_document(db, document_id)
    base = db.query(DocumentVersion).filter(DocumentVersion.document_id == doc.document_id)

    row = base.filter(
        DocumentVersion.version == doc.current_version,
        DocumentVersion.approval_status == APPROVED,
    ).first()
    if row:
        return row

    row = (
        base.filter(DocumentVersion.approval_status == APPROVED)
        .order_by(DocumentVersion.approved_at.desc(), DocumentVersion.version.desc())
        .first()
    )
    if row:
        return row

    row = base.order_by(DocumentVersion.version.desc()).first()
    if not row:
        raise NotFoundError("El documento no tiene versiones")
    return row


def to_response(row: DocumentVersion) -> Dict[str, Any]:
    doc = row.document
    return {
        "version_id": row.version_id,
        "document_id": row.document_id,
        "version": row.version,
        "file_name": row.file_name,
        "file_size": row.file_size,
        "mime_type": row.mime_type,
        "file_path": row.file_path,
        "change_reason": row.change_reason,
        "approval_status": row.approval_status,
        "approved_by": row.approved_by,
        "approved_by_name": row.approver.full_name if row.approver else None,
        "approved_at": row.approved_at,
        "rejection_reason": row.rejection_reason,
        "uploaded_by": row.uploaded_by,
        "uploaded_at": row.uploaded_at,
        "document_name": doc.name if doc else None,
        "document_type": doc.doc_type if doc else None,
        "department_id": doc.department_id if doc else None,
        "center_id": doc.center_id if doc else None,
    }
