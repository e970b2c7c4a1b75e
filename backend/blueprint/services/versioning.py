# backend/blueprint/services/versioning.py
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from .projects import project_service
from .validation import coerce_enum, require_text
from ..config import settings
from ..database import commit_or_raise
from ..errors import NotFoundError
from ..models.base import utcnow
from ..models.document import Document, DocumentType
from ..models.version import Version, VersionStatus
from ..utils.logging import service_logger


class VersioningService:
    """Documents, their numbered version snapshots and the deploy/rollback lifecycle.

    Version numbers are claimed by reading the current maximum and inserting
    the next one in the same transaction. Two writers committing the same
    document at once can pick the same number; the unique constraint on
    (document_id, version_number) rejects the loser with ConstraintViolation
    and nothing is retried.
    """

    # Documents

    @staticmethod
    def get_document(db: Session, document_id: int) -> Document:
        document = db.query(Document).filter(Document.id == document_id).first()
        if not document:
            raise NotFoundError("Document", document_id)
        return document

    @staticmethod
    def list_documents(
            db: Session,
            project_id: int,
            document_type: Optional[DocumentType] = None
    ) -> List[Document]:
        project_service.get_project(db, project_id)

        query = db.query(Document).filter(Document.project_id == project_id)
        if document_type is not None:
            query = query.filter(
                Document.document_type == coerce_enum(DocumentType, document_type, "document_type")
            )
        return query.order_by(Document.updated_at.desc(), Document.id.desc()).all()

    def create_document(
            self,
            db: Session,
            project_id: int,
            title: str,
            content: Optional[str] = "",
            document_type: DocumentType = DocumentType.SPECIFICATION
    ) -> Document:
        """Create a document together with its draft version 1"""
        project_service.get_project(db, project_id)
        require_text(title, "title")
        document_type = coerce_enum(DocumentType, document_type, "document_type")

        document = Document(
            project_id=project_id,
            title=title,
            content=content,
            document_type=document_type
        )
        document.versions.append(Version(
            version_number=1,
            content=content,
            commit_message=settings.INITIAL_COMMIT_MESSAGE,
            committed_at=utcnow(),
            status=VersionStatus.DRAFT
        ))
        db.add(document)
        commit_or_raise(db, project_id=project_id, document_title=title)
        db.refresh(document)

        service_logger.info("Document created", extra={
            "document_id": document.id,
            "project_id": project_id,
            "document_type": document_type.value
        })
        return document

    def update_document(self, db: Session, document_id: int, **fields) -> Document:
        """Edit the live document. Existing versions keep their own content."""
        document = self.get_document(db, document_id)

        if "title" in fields:
            require_text(fields["title"], "title")
        if "document_type" in fields:
            fields["document_type"] = coerce_enum(DocumentType, fields["document_type"], "document_type")

        for field, value in fields.items():
            setattr(document, field, value)

        commit_or_raise(db, document_id=document_id)
        db.refresh(document)

        service_logger.info("Document updated", extra={
            "document_id": document_id,
            "update_fields": list(fields.keys())
        })
        return document

    def delete_document(self, db: Session, document_id: int) -> None:
        document = self.get_document(db, document_id)
        version_count = document.version_count

        db.delete(document)
        commit_or_raise(db, document_id=document_id)

        service_logger.info("Document deleted", extra={
            "document_id": document_id,
            "version_count": version_count
        })

    # Versions

    @staticmethod
    def get_version(db: Session, version_id: int) -> Version:
        version = db.query(Version).filter(Version.id == version_id).first()
        if not version:
            raise NotFoundError("Version", version_id)
        return version

    def list_versions(
            self,
            db: Session,
            document_id: int,
            status: Optional[VersionStatus] = None
    ) -> List[Version]:
        """Versions of a document, newest version number first"""
        self.get_document(db, document_id)

        query = db.query(Version).filter(Version.document_id == document_id)
        if status is not None:
            query = query.filter(Version.status == coerce_enum(VersionStatus, status, "status"))
        return query.order_by(Version.version_number.desc()).all()

    @staticmethod
    def current_version(db: Session, document: Document) -> Optional[Version]:
        return db.query(Version) \
            .filter(Version.document_id == document.id) \
            .order_by(Version.version_number.desc()) \
            .first()

    @staticmethod
    def next_version_number(db: Session, document: Document) -> int:
        latest = db.query(func.max(Version.version_number)) \
            .filter(Version.document_id == document.id) \
            .scalar()
        return (latest or 0) + 1

    def create_new_version(
            self,
            db: Session,
            document_id: int,
            commit_message: Optional[str] = None
    ) -> Version:
        """Snapshot the document's live content as the next committed version"""
        document = self.get_document(db, document_id)
        if commit_message is None or not commit_message.strip():
            commit_message = settings.DEFAULT_COMMIT_MESSAGE

        version_number = self.next_version_number(db, document)
        version = Version(
            document_id=document.id,
            version_number=version_number,
            content=document.content,
            commit_message=commit_message,
            committed_at=utcnow(),
            status=VersionStatus.COMMITTED
        )
        db.add(version)
        commit_or_raise(db, document_id=document_id, version_number=version_number)
        db.refresh(version)

        service_logger.info("Version committed", extra={
            "document_id": document_id,
            "version_id": version.id,
            "version_number": version_number
        })
        return version

    def deploy_version(self, db: Session, version_id: int) -> Version:
        version = self.get_version(db, version_id)

        changed = version.deploy()

        demoted = []
        if settings.ENFORCE_SINGLE_DEPLOYMENT:
            others = db.query(Version).filter(
                Version.document_id == version.document_id,
                Version.id != version.id,
                Version.status == VersionStatus.DEPLOYED
            ).all()
            for other in others:
                other.rollback()
                demoted.append(other.id)

        if not changed and not demoted:
            service_logger.debug("Version already deployed", extra={"version_id": version_id})
            return version

        commit_or_raise(db, version_id=version_id)
        db.refresh(version)

        service_logger.info("Version deployed", extra={
            "version_id": version_id,
            "document_id": version.document_id,
            "version_number": version.version_number,
            "demoted_version_ids": demoted
        })
        return version

    def rollback_version(self, db: Session, version_id: int) -> Version:
        version = self.get_version(db, version_id)

        if not version.rollback():
            service_logger.debug("Version not deployed, nothing to roll back", extra={
                "version_id": version_id,
                "status": version.status.value
            })
            return version

        commit_or_raise(db, version_id=version_id)
        db.refresh(version)

        service_logger.info("Version rolled back", extra={
            "version_id": version_id,
            "document_id": version.document_id,
            "version_number": version.version_number
        })
        return version


versioning_service = VersioningService()
