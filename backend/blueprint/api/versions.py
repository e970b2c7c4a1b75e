# backend/blueprint/api/versions.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .errors import to_http_exception
from ..database import get_db
from ..errors import BlueprintError
from ..models.version import VersionStatus
from ..schemas.version import Version as VersionSchema
from ..services.versioning import versioning_service
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/versions", tags=["versions"])


@router.get("/document/{document_id}", response_model=List[VersionSchema])
async def list_document_versions(
        document_id: int,
        status: Optional[VersionStatus] = None,
        db: Session = Depends(get_db)
):
    """List a document's versions, newest version number first"""
    api_logger.info("Listing versions for document", extra={
        "document_id": document_id,
        "status_filter": status.value if status else None
    })

    try:
        versions = versioning_service.list_versions(db, document_id, status=status)

        api_logger.info("Successfully listed versions", extra={
            "document_id": document_id,
            "version_count": len(versions)
        })
        return versions
    except BlueprintError as e:
        api_logger.warning("Cannot list versions", extra={"document_id": document_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error listing versions", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise


@router.get("/{version_id}", response_model=VersionSchema)
async def get_version(version_id: int, db: Session = Depends(get_db)):
    api_logger.info("Retrieving version", extra={"version_id": version_id})

    try:
        return versioning_service.get_version(db, version_id)
    except BlueprintError as e:
        api_logger.warning("Version not found", extra={"version_id": version_id})
        raise to_http_exception(e)


@router.post("/{version_id}/deploy", response_model=VersionSchema)
async def deploy_version(version_id: int, db: Session = Depends(get_db)):
    api_logger.info("Deploying version", extra={"version_id": version_id})

    try:
        version = versioning_service.deploy_version(db, version_id)

        api_logger.info(f"Version {version.version_number} deployed successfully", extra={
            "version_id": version_id,
            "document_id": version.document_id
        })
        return version
    except BlueprintError as e:
        api_logger.warning("Deploy rejected", extra={"version_id": version_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error deploying version", extra={
            "version_id": version_id,
            "error": str(e)
        })
        db.rollback()
        raise


@router.post("/{version_id}/rollback", response_model=VersionSchema)
async def rollback_version(version_id: int, db: Session = Depends(get_db)):
    api_logger.info("Rolling back version", extra={"version_id": version_id})

    try:
        version = versioning_service.rollback_version(db, version_id)

        api_logger.info(f"Version {version.version_number} rolled back", extra={
            "version_id": version_id,
            "document_id": version.document_id,
            "status": version.status.value
        })
        return version
    except BlueprintError as e:
        api_logger.warning("Rollback rejected", extra={"version_id": version_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Error rolling back version", extra={
            "version_id": version_id,
            "error": str(e)
        })
        db.rollback()
        raise
