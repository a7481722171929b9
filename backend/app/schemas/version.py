"""Esquemas Pydantic de versiones de documentos y su aprobación."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DocumentVersionCreate(BaseModel):
    model_config = {"populate_by_name": True}

    change_reason: str = Field(alias="changeReason")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    file_size: Optional[int] = Field(default=None, alias="fileSize", ge=0)
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    file_path: Optional[str] = Field(default=None, alias="filePath")


class VersionRejectRequest(BaseModel):
    reason: str


class DocumentVersionOut(BaseModel):
    version_id: int
    document_id: int
    version: int
    file_name: Optional[str]
    file_size: Optional[int]
    mime_type: Optional[str]
    file_path: Optional[str]
    change_reason: str
    approval_status: str
    approved_by: Optional[int]
    approved_by_name: Optional[str]
    approved_at: Optional[datetime]
    rejection_reason: Optional[str]
    uploaded_by: Optional[int]
    uploaded_at: Optional[datetime]
    document_name: Optional[str] = None
    document_type: Optional[str] = None
    department_id: Optional[int] = None
    center_id: Optional[int] = None
