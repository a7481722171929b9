"""Modelo SQLAlchemy de incidencias."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from app.database import Base


INCIDENT_TYPES = ("approval_request", "document_observed", "missing_info", "sensitive_change")
INCIDENT_STATUSES = ("pending", "approved", "rejected", "closed")


class Incident(Base):
    __tablename__ = "incidents"

    incident_id = Column(Integer, primary_key=True, autoincrement=True)
    incident_type = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    center_id = Column(Integer, ForeignKey("centers.center_id"))
    document_id = Column(Integer, ForeignKey("documents.document_id"))
    created_by = Column(Integer, ForeignKey("users.user_id"))
    created_by_name = Column(String(150))
    assigned_to = Column(Integer, ForeignKey("users.user_id"))
    resolved_by = Column(Integer, ForeignKey("users.user_id"))
    resolution_comment = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_incident_status", "status", "created_at"),
    )
