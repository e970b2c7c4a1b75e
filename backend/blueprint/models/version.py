# backend/blueprint/models/version.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from .base import utcnow, enum_values


class VersionStatus(str, enum.Enum):
    DRAFT = "draft"
    COMMITTED = "committed"
    DEPLOYED = "deployed"
    ROLLED_BACK = "rolled_back"


class Version(Base):
    __tablename__ = "versions"
    __table_args__ = (
        UniqueConstraint("document_id", "version_number", name="uq_versions_document_id_version_number"),
        CheckConstraint("version_number > 0", name="ck_versions_version_number_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    version_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=True)
    commit_message = Column(String(255), nullable=True)
    committed_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(
        Enum(VersionStatus, values_callable=enum_values, length=20),
        nullable=False,
        default=VersionStatus.DRAFT,
        index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    document = relationship("Document", back_populates="versions")

    @property
    def is_deployed(self) -> bool:
        return self.status == VersionStatus.DEPLOYED

    def deploy(self) -> bool:
        """Mark as deployed. Returns False when already deployed (no change)."""
        if self.is_deployed:
            return False
        self.status = VersionStatus.DEPLOYED
        self.committed_at = utcnow()
        return True

    def rollback(self) -> bool:
        """Revert a deployed version. Returns False when not deployed (no change)."""
        if not self.is_deployed:
            return False
        self.status = VersionStatus.ROLLED_BACK
        return True
