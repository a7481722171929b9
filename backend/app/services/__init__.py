"""Capa de servicios: reglas de negocio sobre la sesión de base de datos."""

from app.services import (
    audit_service,
    auth_service,
    document_service,
    version_service,
    notification_service,
    incident_service,
    reminder_service,
    expiration_service,
)
