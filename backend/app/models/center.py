"""Modelos SQLAlchemy de centros y departamentos."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Department(Base):
    __tablename__ = "departments"

    department_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    description = Column(Text)
    icon = Column(String(50))
    created_at = Column(DateTime, server_default=func.now())

    documents = relationship("Document", back_populates="department")
    users = relationship("User", back_populates="department")


class Center(Base):
    __tablename__ = "centers"

    center_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    center_type = Column(String(20), nullable=False, default="centro")
    # centro/edificio/planta/sucursal
    status = Column(String(20), nullable=False, default="active")  # active/inactive
    state = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    address = Column(String(300), nullable=False)
    latitude = Column(String(30))
    longitude = Column(String(30))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    documents = relationship("Document", back_populates="center")
