"""Rutas de documentos. Validan la petición y delegan en document_service."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.document import DocumentCreate, DocumentUpdate, DocumentOut
from app.middleware.auth_middleware import get_current_user, require_capability
from app.models.user import User
from app.services import document_service
from app.utils import permissions
from app.utils.helpers import client_ip

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("", response_model=List[DocumentOut])
def list_documents(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    center_id: Optional[int] = Query(None, alias="centerId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_documents(db, department_id=department_id, center_id=center_id)


@router.post("", response_model=DocumentOut, status_code=201)
def create_document(
    data: DocumentCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.DOCUMENT_CREATE)),
):
    return document_service.create_document(
        db,
        name=data.name,
        doc_type=data.doc_type,
        center_id=data.center_id,
        department_id=data.department_id,
        expiration_date=data.expiration_date,
        actor=current_user,
        ip_address=client_ip(request),
    )


@router.get("/{document_id}", response_model=DocumentOut)
def get_document(
    document_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    doc = document_service.get_document(db, document_id)
    document_service.record_view(db, doc, actor=current_user, ip_address=client_ip(request))
    db.refresh(doc)
    return doc


@router.patch("/{document_id}", response_model=DocumentOut)
def update_document(
    document_id: int,
    data: DocumentUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.DOCUMENT_UPDATE)),
):
    return document_service.update_document(
        db,
        document_id,
        data.model_dump(exclude_unset=True),
        actor=current_user,
        ip_address=client_ip(request),
    )
