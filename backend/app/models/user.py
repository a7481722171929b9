"""Modelo SQLAlchemy de usuarios."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    full_name = Column(String(150), nullable=False)
    email = Column(String(150))
    role = Column(String(20), nullable=False, default="viewer")
    # super_admin/admin/auxiliar/viewer/auditor
    department_id = Column(Integer, ForeignKey("departments.department_id"))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    department = relationship("Department", back_populates="users")
    notifications = relationship("Notification", back_populates="user")
