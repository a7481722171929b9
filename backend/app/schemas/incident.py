"""Esquemas Pydantic de incidencias."""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime


class IncidentCreate(BaseModel):
    model_config = {"populate_by_name": True}

    incident_type: Literal["approval_request", "document_observed", "missing_info", "sensitive_change"] = Field(
        alias="type"
    )
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    center_id: Optional[int] = Field(default=None, alias="centerId")
    document_id: Optional[int] = Field(default=None, alias="documentId")
    assigned_to: Optional[int] = Field(default=None, alias="assignedTo")


class IncidentResolve(BaseModel):
    model_config = {"populate_by_name": True}

    status: Literal["approved", "rejected", "closed"]
    resolution_comment: Optional[str] = Field(default=None, alias="resolutionComment")


class IncidentOut(BaseModel):
    incident_id: int
    incident_type: str
    status: str
    title: str
    description: str
    center_id: Optional[int]
    document_id: Optional[int]
    created_by: Optional[int]
    created_by_name: Optional[str]
    assigned_to: Optional[int]
    resolved_by: Optional[int]
    resolution_comment: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}
