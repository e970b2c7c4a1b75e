# backend/blueprint/models/project.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.orm import relationship, object_session
from sqlalchemy.sql import func

from ..database import Base
from .base import utcnow, enum_values
from .document import Document


class ProjectStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(ProjectStatus, values_callable=enum_values, length=20),
        nullable=False,
        default=ProjectStatus.DRAFT,
        index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    documents = relationship(
        "Document",
        back_populates="project",
        cascade="all, delete-orphan"
    )

    @property
    def document_count(self) -> int:
        session = object_session(self)
        if session is None:
            return len(self.documents)
        return session.query(func.count(Document.id)) \
            .filter(Document.project_id == self.id) \
            .scalar() or 0

    @property
    def latest_document(self):
        """Document with the most recent update, or None"""
        session = object_session(self)
        if session is None:
            if not self.documents:
                return None
            return max(
                self.documents,
                key=lambda doc: (doc.updated_at is not None, doc.updated_at or 0, doc.id or 0)
            )
        return session.query(Document) \
            .filter(Document.project_id == self.id) \
            .order_by(Document.updated_at.desc(), Document.id.desc()) \
            .first()
