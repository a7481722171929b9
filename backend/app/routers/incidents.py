"""Rutas de incidencias."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.incident import IncidentCreate, IncidentOut, IncidentResolve
from app.middleware.auth_middleware import get_current_user, require_capability
from app.models.user import User
from app.services import incident_service
from app.utils import permissions
from app.utils.helpers import client_ip

router = APIRouter(prefix="/api/incidents", tags=["incidents"])


@router.get("", response_model=List[IncidentOut])
def list_incidents(
    status: Optional[str] = None,
    incident_type: Optional[str] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return incident_service.list_incidents(db, status=status, incident_type=incident_type)


@router.get("/{incident_id}", response_model=IncidentOut)
def get_incident(incident_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return incident_service.get_incident(db, incident_id)


@router.post("", response_model=IncidentOut, status_code=201)
def create_incident(
    data: IncidentCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.INCIDENT_CREATE)),
):
    return incident_service.create_incident(
        db,
        actor=current_user,
        incident_type=data.incident_type,
        title=data.title,
        description=data.description,
        center_id=data.center_id,
        document_id=data.document_id,
        assigned_to=data.assigned_to,
        ip_address=client_ip(request),
    )


@router.patch("/{incident_id}", response_model=IncidentOut)
def resolve_incident(
    incident_id: int,
    data: IncidentResolve,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(permissions.INCIDENT_RESOLVE)),
):
    return incident_service.resolve_incident(
        db,
        incident_id,
        actor=current_user,
        status=data.status,
        resolution_comment=data.resolution_comment,
        ip_address=client_ip(request),
    )
