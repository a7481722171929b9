"""Esquemas Pydantic de usuarios y autenticación."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserOut(BaseModel):
    user_id: int
    username: str
    full_name: str
    email: Optional[str] = None
    role: str
    department_id: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
