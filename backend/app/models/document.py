"""Modelos SQLAlchemy de documentos y sus versiones."""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
APPROVAL_STATUSES = (PENDING, APPROVED, REJECTED)


class Document(Base):
    __tablename__ = "documents"

    document_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    doc_type = Column(String(50), nullable=False)
    # escritura/predial/contrato/licencia/dictamen/reporte
    center_id = Column(Integer, ForeignKey("centers.center_id"), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.department_id"), nullable=False)
    current_version = Column(Integer, nullable=False, default=1)
    expiration_date = Column(DateTime)
    reminder_sent_30 = Column(Boolean, nullable=False, default=False)
    reminder_sent_15 = Column(Boolean, nullable=False, default=False)
    reminder_sent_7 = Column(Boolean, nullable=False, default=False)
    reminder_sent_expired = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, ForeignKey("users.user_id"))
    created_at = Column(DateTime, server_default=func.now())

    center = relationship("Center", back_populates="documents")
    department = relationship("Department", back_populates="documents")
    versions = relationship("DocumentVersion", back_populates="document", order_by="DocumentVersion.version")

    __table_args__ = (
        Index("idx_document_expiration", "expiration_date"),
        Index("idx_document_department", "department_id"),
    )


class DocumentVersion(Base):
    __tablename__ = "document_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.document_id"), nullable=False)
    version = Column(Integer, nullable=False)
    file_name = Column(String(300))
    file_size = Column(Integer)
    mime_type = Column(String(100))
    file_path = Column(String(500))  # referencia opaca al almacenamiento
    change_reason = Column(Text, nullable=False)
    approval_status = Column(String(20), nullable=False, default=PENDING)
    approved_by = Column(Integer, ForeignKey("users.user_id"))
    approved_at = Column(DateTime)
    rejection_reason = Column(Text)
    uploaded_by = Column(Integer, ForeignKey("users.user_id"))
    uploaded_at = Column(DateTime, server_default=func.now())

    document = relationship("Document", back_populates="versions")
    approver = relationship("User", foreign_keys=[approved_by])
    uploader = relationship("User", foreign_keys=[uploaded_by])

    __table_args__ = (
        UniqueConstraint("document_id", "version", name="uq_document_version_number"),
        Index("idx_version_status", "approval_status", "uploaded_at"),
    )
