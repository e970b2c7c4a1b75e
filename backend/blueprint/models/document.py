# backend/blueprint/models/document.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from .base import utcnow, enum_values


class DocumentType(str, enum.Enum):
    SPECIFICATION = "specification"
    FEATURE = "feature"
    COMPONENT = "component"
    PAGE = "page"
    API = "api"
    DATABASE = "database"


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_project_id_title", "project_id", "title"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    document_type = Column(
        Enum(DocumentType, values_callable=enum_values, length=20),
        nullable=False,
        default=DocumentType.SPECIFICATION,
        index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="documents")
    versions = relationship(
        "Version",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="Version.version_number"
    )

    @property
    def current_version(self):
        """Highest-numbered version, or None"""
        return self.versions[-1] if self.versions else None

    @property
    def version_count(self) -> int:
        return len(self.versions)
