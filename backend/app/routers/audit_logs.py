"""Consulta de la bitácora de auditoría."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.audit import AuditLogOut
from app.middleware.auth_middleware import require_capability
from app.models.user import User
from app.services import audit_service
from app.utils import permissions

router = APIRouter(prefix="/api/audit-logs", tags=["audit"])


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.AUDIT_VIEW)),
):
    return audit_service.list_audit_logs(db, limit)
