# backend/blueprint/api/projects.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .errors import to_http_exception
from ..database import get_db
from ..errors import BlueprintError
from ..models.project import ProjectStatus
from ..schemas.document import Document as DocumentSchema
from ..schemas.project import ProjectCreate, ProjectUpdate, Project as ProjectSchema, ProjectDetail
from ..services.projects import project_service
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _project_detail(project) -> ProjectDetail:
    latest = project.latest_document
    detail = ProjectDetail.model_validate({
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "status": project.status,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
        "document_count": project.document_count,
        "latest_document": DocumentSchema.model_validate(latest) if latest else None
    })
    return detail


@router.get("", response_model=List[ProjectDetail])
async def list_projects(status: Optional[ProjectStatus] = None, db: Session = Depends(get_db)):
    """List projects, most recently updated first"""
    api_logger.info("Listing projects", extra={
        "endpoint": "/api/projects",
        "method": "GET",
        "status_filter": status.value if status else None
    })

    try:
        projects = project_service.list_projects(db, status=status)
        result = [_project_detail(project) for project in projects]

        api_logger.info("Sending response", extra={"project_count": len(result)})
        return result
    except BlueprintError as e:
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Failed to list projects", extra={"error": str(e)})
        raise


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(project_id: int, db: Session = Depends(get_db)):
    api_logger.info("Fetching project", extra={"project_id": project_id})

    try:
        project = project_service.get_project(db, project_id)
        detail = _project_detail(project)

        api_logger.info("Project retrieved successfully", extra={
            "project_id": project_id,
            "document_count": detail.document_count
        })
        return detail
    except BlueprintError as e:
        api_logger.warning("Project lookup failed", extra={"project_id": project_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Failed to get project", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise


@router.post("", response_model=ProjectSchema)
async def create_project(project: ProjectCreate, db: Session = Depends(get_db)):
    api_logger.info("Creating new project", extra={"project_name": project.name})

    try:
        db_project = project_service.create_project(db, **project.model_dump())

        api_logger.info("Project created successfully", extra={
            "project_id": db_project.id,
            "project_name": db_project.name
        })
        return db_project
    except BlueprintError as e:
        api_logger.warning("Rejected project", extra={"project_name": project.name, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_name": project.name,
            "error": str(e)
        })
        db.rollback()
        raise


@router.put("/{project_id}", response_model=ProjectSchema)
async def update_project(project_id: int, project: ProjectUpdate, db: Session = Depends(get_db)):
    api_logger.info("Updating project", extra={"project_id": project_id})

    try:
        db_project = project_service.update_project(
            db, project_id, **project.model_dump(exclude_unset=True)
        )

        api_logger.info("Project updated successfully", extra={"project_id": project_id})
        return db_project
    except BlueprintError as e:
        api_logger.warning("Project update rejected", extra={"project_id": project_id, "error": str(e)})
        raise to_http_exception(e)
    except Exception as e:
        api_logger.error("Failed to update project", extra={
            "project_id": project_id,
            "error": str(e)
        })
        db.rollback()
        raise


@router.delete("/{project_id}")
async def delete_project(project_id: int, db: Session = Depends(get_db)):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    try:
        # Documents and their versions go with it
        project_service.delete_project(db, project_id)

        api_logger.info(f"Successfully deleted project {project_id}")
        return {"success": True}

    except BlueprintError as e:
        api_logger.warning("Project not found for deletion", extra={"project_id": project_id})
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete project: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
