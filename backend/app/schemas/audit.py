"""Esquemas Pydantic de la bitácora de auditoría."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AuditLogOut(BaseModel):
    log_id: int
    user_id: Optional[int]
    user_name: Optional[str]
    action: str
    entity_type: str
    entity_id: Optional[int]
    entity_name: Optional[str]
    details: Optional[str]
    ip_address: Optional[str]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}
