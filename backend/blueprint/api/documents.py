# backend/blueprint/api/documents.py
import time
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from .errors import to_http_exception
from ..database import get_db
from ..errors import BlueprintError
from ..models.document import DocumentType
from ..schemas.document import DocumentCreate, DocumentUpdate, Document as DocumentSchema, DocumentDetail
from ..schemas.version import Version as VersionSchema, VersionCommit
from ..services.versioning import versioning_service
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _document_detail(document) -> DocumentDetail:
    doc_data = DocumentDetail.model_validate(document)
    # Newest first, matching the versions listing
    doc_data.versions = sorted(doc_data.versions, key=lambda v: v.version_number, reverse=True)
    return doc_data


@router.get("/project/{project_id}", response_model=List[DocumentSchema])
async def list_project_documents(
        project_id: int,
        document_type: Optional[DocumentType] = None,
        db: Session = Depends(get_db)
):
    api_logger.info("Listing documents for project", extra={
        "project_id": project_id,
        "document_type": document_type.value if document_type else None,
        "operation": "list_project_documents"
    })

    try:
        start_time = time.time()
        documents = versioning_service.list_documents(db, project_id, document_type=document_type)

        execution_time = time.time() - start_time
        api_logger.info("Successfully listed project documents", extra={
            "project_id": project_id,
            "document_count": len(documents),
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return documents

    except BlueprintError as e:
        api_logger.warning("Cannot list documents", extra={"project_id": project_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error listing project documents", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise


@router.post("", response_model=DocumentDetail)
async def create_document(document: DocumentCreate, db: Session = Depends(get_db)):
    api_logger.info("Creating new document", extra={
        "project_id": document.project_id,
        "document_title": document.title
    })

    try:
        start_time = time.time()
        db_document = versioning_service.create_document(
            db,
            project_id=document.project_id,
            title=document.title,
            content=document.content,
            document_type=document.document_type
        )

        execution_time = time.time() - start_time
        api_logger.info("Successfully created document", extra={
            "document_id": db_document.id,
            "project_id": db_document.project_id,
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return _document_detail(db_document)

    except BlueprintError as e:
        api_logger.warning("Document rejected", extra={
            "project_id": document.project_id,
            "error": str(e)
        })
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error creating document", extra={
            "project_id": document.project_id,
            "document_title": document.title,
            "error": str(e)
        })
        db.rollback()
        raise


@router.get("/{document_id}", response_model=DocumentDetail)
async def get_document(document_id: int, db: Session = Depends(get_db)):
    api_logger.info("Retrieving document details", extra={
        "document_id": document_id
    })

    try:
        document = versioning_service.get_document(db, document_id)
        doc_data = _document_detail(document)

        api_logger.info("Successfully retrieved document", extra={
            "document_id": document_id,
            "version_count": doc_data.version_count
        })
        return doc_data

    except BlueprintError as e:
        api_logger.warning("Document not found", extra={"document_id": document_id})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error retrieving document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise


@router.put("/{document_id}", response_model=DocumentSchema)
async def update_document(document_id: int, document: DocumentUpdate, db: Session = Depends(get_db)):
    changes = document.model_dump(exclude_unset=True)
    api_logger.info("Updating document", extra={
        "document_id": document_id,
        "update_fields": list(changes.keys())
    })

    try:
        db_document = versioning_service.update_document(db, document_id, **changes)

        api_logger.info("Successfully updated document", extra={"document_id": document_id})
        return db_document

    except BlueprintError as e:
        api_logger.warning("Document update rejected", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error updating document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        db.rollback()
        raise


@router.delete("/{document_id}")
async def delete_document(document_id: int, db: Session = Depends(get_db)):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    try:
        versioning_service.delete_document(db, document_id)

        api_logger.info(f"Successfully deleted document {document_id}")
        return {"success": True}

    except BlueprintError as e:
        api_logger.warning("Document not found for deletion", extra={"document_id": document_id})
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete document: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{document_id}/commit", response_model=VersionSchema)
async def commit_version(
        document_id: int,
        commit: Optional[VersionCommit] = Body(default=None),
        db: Session = Depends(get_db)
):
    """Snapshot the document's current content as a new committed version"""
    commit_message = commit.commit_message if commit else None
    api_logger.info("Committing new version", extra={
        "document_id": document_id,
        "commit_message": commit_message
    })

    try:
        version = versioning_service.create_new_version(db, document_id, commit_message=commit_message)

        api_logger.info("New version committed successfully", extra={
            "document_id": document_id,
            "version_number": version.version_number
        })
        return version

    except BlueprintError as e:
        api_logger.warning("Commit rejected", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error committing version", extra={
            "document_id": document_id,
            "error": str(e)
        })
        db.rollback()
        raise
