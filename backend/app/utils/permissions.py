"""Tabla de roles y capacidades evaluada en el servidor."""

from typing import Dict, Tuple

from app.models.user import User


SUPER_ADMIN = "super_admin"
ADMIN = "admin"
AUXILIAR = "auxiliar"
VIEWER = "viewer"
AUDITOR = "auditor"

ADMIN_ROLES = (SUPER_ADMIN, ADMIN)

DOCUMENT_CREATE = "document.create"
DOCUMENT_UPDATE = "document.update"
VERSION_CREATE = "version.create"
VERSION_REVIEW = "version.review"
VERSION_APPROVE = "version.approve"
VERSION_REJECT = "version.reject"
INCIDENT_CREATE = "incident.create"
INCIDENT_RESOLVE = "incident.resolve"
AUDIT_VIEW = "audit.view"

CAPABILITIES: Dict[str, Tuple[str, ...]] = {
    DOCUMENT_CREATE: (*ADMIN_ROLES, AUXILIAR),
    DOCUMENT_UPDATE: ADMIN_ROLES,
    VERSION_CREATE: (*ADMIN_ROLES, AUXILIAR),
    VERSION_REVIEW: (*ADMIN_ROLES, AUDITOR),
    VERSION_APPROVE: ADMIN_ROLES,
    VERSION_REJECT: ADMIN_ROLES,
    INCIDENT_CREATE: (*ADMIN_ROLES, AUXILIAR, AUDITOR),
    INCIDENT_RESOLVE: ADMIN_ROLES,
    AUDIT_VIEW: (*ADMIN_ROLES, AUDITOR),
}


def is_admin(user: User) -> bool:
    return user.role in ADMIN_ROLES


def has_capability(user: User, capability: str) -> bool:
    # Una capacidad desconocida nunca se concede.
    return user.role in CAPABILITIES.get(capability, ())
