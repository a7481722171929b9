"""Rutas del flujo de aprobación de versiones de documentos."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.document import APPROVED, PENDING, REJECTED
from app.models.user import User
from app.schemas.version import DocumentVersionCreate, DocumentVersionOut, VersionRejectRequest
from app.middleware.auth_middleware import get_current_user, require_capability
from app.services import version_service
from app.utils import permissions
from app.utils.helpers import client_ip

router = APIRouter(prefix="/api", tags=["versions"])


@router.get("/documents/{document_id}/versions", response_model=List[DocumentVersionOut])
def list_document_versions(
    document_id: int,
    show_all: bool = Query(False, alias="showAll"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = version_service.list_document_versions(db, document_id, show_all=show_all)
    return [version_service.to_response(row) for row in rows]


@router.post("/documents/{document_id}/versions", response_model=DocumentVersionOut, status_code=201)
def create_document_version(
    document_id: int,
    data: DocumentVersionCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_CREATE)),
):
    row = version_service.create_version(
        db,
        document_id=document_id,
        change_reason=data.change_reason,
        uploaded_by=current_user,
        file_name=data.file_name,
        file_size=data.file_size,
        mime_type=data.mime_type,
        file_path=data.file_path,
        ip_address=client_ip(request),
    )
    return version_service.to_response(row)


@router.get("/documents/{document_id}/current-version", response_model=DocumentVersionOut)
def get_current_version(
    document_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return version_service.to_response(version_service.get_current_version(db, document_id))


def _review_queue(db: Session, status: str, department_id: Optional[int]):
    return [version_service.to_response(row) for row in version_service.list_by_status(db, status, department_id)]


@router.get("/pending-approvals", response_model=List[DocumentVersionOut])
def list_pending_approvals(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_REVIEW)),
):
    return _review_queue(db, PENDING, department_id)


@router.get("/approved-versions", response_model=List[DocumentVersionOut])
def list_approved_versions(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_REVIEW)),
):
    return _review_queue(db, APPROVED, department_id)


@router.get("/rejected-versions", response_model=List[DocumentVersionOut])
def list_rejected_versions(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_REVIEW)),
):
    return _review_queue(db, REJECTED, department_id)


@router.post("/versions/{version_id}/approve", response_model=DocumentVersionOut)
def approve_version(
    version_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_APPROVE)),
):
    row = version_service.approve_version(db, version_id, approver=current_user, ip_address=client_ip(request))
    return version_service.to_response(row)


@router.post("/versions/{version_id}/reject", response_model=DocumentVersionOut)
def reject_version(
    version_id: int,
    data: VersionRejectRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.VERSION_REJECT)),
):
    row = version_service.reject_version(
        db,
        version_id,
        reviewer=current_user,
        reason=data.reason,
        ip_address=client_ip(request),
    )
    return version_service.to_response(row)
