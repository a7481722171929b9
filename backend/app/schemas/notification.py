"""Esquemas Pydantic de notificaciones."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationOut(BaseModel):
    noti_id: int
    user_id: int
    noti_type: str
    title: str
    message: str
    is_read: bool
    related_entity_type: Optional[str]
    related_entity_id: Optional[int]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}
