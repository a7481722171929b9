"""Barrido de documentos próximos a vencer o vencidos.

Cada nivel de aviso (30, 15 y 7 días, y vencido) se dispara como máximo una
vez por documento gracias a los cerrojos ``reminder_sent_*``. En un mismo
barrido un documento recibe a lo sumo un aviso: el de su nivel actual, si
su cerrojo sigue abierto.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config import settings
from app.models.document import Document
from app.services.reminder_service import send_reminder
from app.utils.helpers import to_naive_utc, utcnow
from app.utils.urgency import LEVEL_15, LEVEL_30, LEVEL_7, LEVEL_EXPIRED, days_until_expiration

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    checked: int = 0
    reminders_sent: int = 0
    notifications_created: int = 0
    incidents_created: int = 0
    failed: int = 0


def get_expiring_documents(db: Session, now: datetime, window_days: int) -> List[Document]:
    """Documentos que vencen dentro de la ventana y aún tienen algún aviso pendiente."""
    horizon = now + timedelta(days=window_days)
    return (
        db.query(Document)
        .filter(
            Document.expiration_date.isnot(None),
            Document.expiration_date > now,
            Document.expiration_date <= horizon,
            or_(
                Document.reminder_sent_30 == False,
                Document.reminder_sent_15 == False,
                Document.reminder_sent_7 == False,
            ),
        )
        .order_by(Document.expiration_date, Document.document_id)
        .all()
    )


def get_expired_documents(db: Session, now: datetime) -> List[Document]:
    return (
        db.query(Document)
        .filter(
            Document.expiration_date.isnot(None),
            Document.expiration_date <= now,
            Document.reminder_sent_expired == False,
        )
        .order_by(Document.expiration_date, Document.document_id)
        .all()
    )


def select_reminder_level(doc: Document, days_left: int) -> Optional[str]:
    """Nivel que corresponde a ``days_left`` si su cerrojo sigue abierto.

    Los niveles menos urgentes que no se enviaron a tiempo no se recuperan.
    """
    if days_left <= 7:
        return None if doc.reminder_sent_7 else LEVEL_7
    if days_left <= 15:
        return None if doc.reminder_sent_15 else LEVEL_15
    if days_left <= 30:
        return None if doc.reminder_sent_30 else LEVEL_30
    return None


def _process(db: Session, doc: Document, level: str, days_left: int, result: SweepResult) -> None:
    document_id = doc.document_id
    try:
        outcome = send_reminder(db, doc, level, days_left)
    except Exception:
        db.rollback()
        result.failed += 1
        logger.exception("[expiration-checker] Falló el aviso %s del documento %s", level, document_id)
        return
    if outcome is None:
        return
    result.reminders_sent += 1
    result.notifications_created += len(outcome.notifications)
    if outcome.incident is not None:
        result.incidents_created += 1


def check_expiring_documents(db: Session, now: Optional[datetime] = None) -> SweepResult:
    now = to_naive_utc(now) if now else utcnow()
    result = SweepResult()

    expiring = get_expiring_documents(db, now, settings.EXPIRATION_WARNING_DAYS)
    expired = get_expired_documents(db, now)
    # Se toman los valores ahora; cada commit o rollback expira las instancias.
    expiring_plan = [(doc, days_until_expiration(doc.expiration_date, now)) for doc in expiring]
    expired_plan = [(doc, days_until_expiration(doc.expiration_date, now)) for doc in expired]
    result.checked = len(expiring_plan) + len(expired_plan)

    for doc, days_left in expired_plan:
        _process(db, doc, LEVEL_EXPIRED, days_left, result)

    for doc, days_left in expiring_plan:
        level = select_reminder_level(doc, days_left)
        if level is not None:
            _process(db, doc, level, days_left, result)

    logger.info(
        "[expiration-checker] Revisados %d documentos con fecha de vencimiento "
        "(avisos=%d, notificaciones=%d, incidencias=%d, fallidos=%d)",
        result.checked,
        result.reminders_sent,
        result.notifications_created,
        result.incidents_created,
        result.failed,
    )
    return result
