"""Paquete de modelos SQLAlchemy."""

from app.models.center import Center, Department
from app.models.user import User
from app.models.document import Document, DocumentVersion
from app.models.incident import Incident
from app.models.notification import Notification
from app.models.audit_log import AuditLog

__all__ = [
    "Center", "Department",
    "User",
    "Document", "DocumentVersion",
    "Incident",
    "Notification",
    "AuditLog",
]
