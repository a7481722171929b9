"""Modelo SQLAlchemy de la bitácora de auditoría (solo inserción)."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from app.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    log_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer)
    user_name = Column(String(150))
    action = Column(String(20), nullable=False)
    # create/update/view/version/approve/reject/resolve
    entity_type = Column(String(30), nullable=False)  # center/document/user/incident
    entity_id = Column(Integer)
    entity_name = Column(String(300))
    details = Column(Text)
    ip_address = Column(String(64))
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_audit_created", "created_at"),
    )
