"""Esquemas Pydantic de documentos."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class DocumentCreate(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = Field(min_length=1, max_length=200)
    doc_type: str = Field(alias="type", min_length=1, max_length=50)
    center_id: int = Field(alias="centerId")
    department_id: int = Field(alias="departmentId")
    expiration_date: Optional[datetime] = Field(default=None, alias="expirationDate")


class DocumentUpdate(BaseModel):
    model_config = {"populate_by_name": True}

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    doc_type: Optional[str] = Field(default=None, alias="type", min_length=1, max_length=50)
    expiration_date: Optional[datetime] = Field(default=None, alias="expirationDate")


class DocumentOut(BaseModel):
    document_id: int
    name: str
    doc_type: str
    center_id: int
    department_id: int
    current_version: int
    expiration_date: Optional[datetime]
    reminder_sent_30: bool
    reminder_sent_15: bool
    reminder_sent_7: bool
    reminder_sent_expired: bool
    created_by: Optional[int]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}
