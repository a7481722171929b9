"""Reglas de difusión de avisos de vencimiento.

Los textos se construyen de forma determinista a partir del documento y de los
días restantes. Sólo el aviso de documento vencido genera además una
incidencia ``document_observed``.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.models.center import Center
from app.models.document import Document
from app.models.incident import Incident
from app.models.notification import Notification
from app.services import audit_service
from app.services.incident_service import build_incident
from app.services.notification_service import get_admin_recipients, notify_users
from app.utils.helpers import format_long_date
from app.utils.urgency import LATCH_COLUMNS, urgency_label

logger = logging.getLogger(__name__)

DOCUMENT_EXPIRING = "document_expiring"
DOCUMENT_EXPIRED = "document_expired"
UNKNOWN_CENTER = "Desconocido"


@dataclass(frozen=True)
class ReminderMessage:
    noti_type: str
    title: str
    message: str


@dataclass
class ReminderOutcome:
    document_id: int
    level: str
    notifications: List[Notification]
    incident: Optional[Incident] = None


def build_reminder(doc: Document, days_left: int) -> ReminderMessage:
    if days_left <= 0:
        return ReminderMessage(
            noti_type=DOCUMENT_EXPIRED,
            title=f"⚠️ Documento vencido: {doc.name}",
            message=(
                f'El documento "{doc.name}" ({doc.doc_type}) ha vencido. '
                "Se requiere acción inmediata para renovar o actualizar este documento."
            ),
        )
    return ReminderMessage(
        noti_type=DOCUMENT_EXPIRING,
        title=f"🔔 {urgency_label(days_left)}: {doc.name} vence en {days_left} días",
        message=(
            f'El documento "{doc.name}" ({doc.doc_type}) vence el '
            f"{format_long_date(doc.expiration_date)}. "
            f"Quedan {days_left} días para su vencimiento."
        ),
    )


def build_expired_incident(doc: Document, center_name: Optional[str]) -> Incident:
    return build_incident(
        incident_type="document_observed",
        title=f"Documento vencido: {doc.name}",
        description=(
            f'El documento "{doc.name}" ({doc.doc_type}) del centro '
            f'"{center_name or UNKNOWN_CENTER}" ha vencido el '
            f"{format_long_date(doc.expiration_date)}. "
            "Se requiere renovación o actualización."
        ),
        center_id=doc.center_id,
        document_id=doc.document_id,
        created_by_name=settings.SYSTEM_ACTOR_NAME,
    )


def _claim_latch(db: Session, document_id: int, level: str) -> bool:
    column = getattr(Document, LATCH_COLUMNS[level])
    changed = (
        db.query(Document)
        .filter(Document.document_id == document_id, column == False)
        .update({column: True}, synchronize_session=False)
    )
    return bool(changed)


def send_reminder(db: Session, doc: Document, level: str, days_left: int) -> Optional[ReminderOutcome]:
    """Dispara el aviso ``level`` para ``doc`` y cierra su cerrojo.

    Devuelve ``None`` si otro proceso ya había cerrado el cerrojo. La
    transacción incluye cerrojo, notificaciones e incidencia.
    """
    document_id = doc.document_id
    if not _claim_latch(db, document_id, level):
        db.rollback()
        logger.info("[expiration-checker] Aviso %s del documento %s ya enviado", level, document_id)
        return None

    reminder = build_reminder(doc, days_left)
    notifications = notify_users(
        db,
        get_admin_recipients(db),
        noti_type=reminder.noti_type,
        title=reminder.title,
        message=reminder.message,
        related_entity_type="document",
        related_entity_id=document_id,
    )

    incident = None
    if days_left <= 0:
        center = db.query(Center).filter(Center.center_id == doc.center_id).first()
        incident = build_expired_incident(doc, center.name if center else None)
        db.add(incident)
        db.flush()
        audit_service.record(
            db,
            actor=None,
            actor_name=settings.SYSTEM_ACTOR_NAME,
            action="create",
            entity_type="incident",
            entity_id=incident.incident_id,
            entity_name=incident.title,
            details=f"Documento {document_id} vencido",
        )

    db.commit()
    return ReminderOutcome(
        document_id=document_id,
        level=level,
        notifications=notifications,
        incident=incident,
    )
