"""Consulta y creación de notificaciones por usuario."""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.models.user import User
from app.utils.errors import NotFoundError


def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read == False)
    return q.order_by(Notification.created_at.desc(), Notification.noti_id.desc()).limit(100).all()


def mark_read(db: Session, noti_id: int, user_id: int) -> Notification:
    noti = db.query(Notification).filter(
        Notification.noti_id == noti_id,
        Notification.user_id == user_id,
    ).first()
    if not noti:
        raise NotFoundError("Notificación no encontrada")
    noti.is_read = True
    db.commit()
    db.refresh(noti)
    return noti


def mark_all_read(db: Session, user_id: int):
    db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read == False,
    ).update({"is_read": True})
    db.commit()


def get_admin_recipients(db: Session) -> List[User]:
    return (
        db.query(User)
        .filter(User.is_active == True, User.role.in_(("super_admin", "admin")))
        .order_by(User.user_id)
        .all()
    )


def create_notification(
    db: Session,
    user_id: int,
    noti_type: str,
    title: str,
    message: str,
    related_entity_type: Optional[str] = None,
    related_entity_id: Optional[int] = None,
    commit: bool = True,
) -> Notification:
    noti = Notification(
        user_id=user_id,
        noti_type=noti_type,
        title=title,
        message=message,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
    )
    db.add(noti)
    if commit:
        db.commit()
        db.refresh(noti)
    return noti


def notify_users(
    db: Session,
    users: Iterable[User],
    *,
    noti_type: str,
    title: str,
    message: str,
    related_entity_type: Optional[str] = None,
    related_entity_id: Optional[int] = None,
) -> List[Notification]:
    # El llamador confirma la transacción.
    return [
        create_notification(
            db,
            user.user_id,
            noti_type,
            title,
            message,
            related_entity_type=related_entity_type,
            related_entity_id=related_entity_id,
            commit=False,
        )
        for user in users
    ]
