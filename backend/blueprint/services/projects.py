# backend/blueprint/services/projects.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .validation import coerce_enum, require_text
from ..database import commit_or_raise
from ..errors import NotFoundError, ValidationError
from ..models.project import Project, ProjectStatus
from ..utils.logging import service_logger


class ProjectService:
    """Create, update and delete projects; cascades are handled by the ORM"""

    @staticmethod
    def get_project(db: Session, project_id: int) -> Project:
        project = db.query(Project).filter(Project.id == project_id).first()
        if not project:
            raise NotFoundError("Project", project_id)
        return project

    @staticmethod
    def list_projects(db: Session, status: Optional[ProjectStatus] = None) -> List[Project]:
        query = db.query(Project)
        if status is not None:
            query = query.filter(Project.status == coerce_enum(ProjectStatus, status, "status"))
        return query.order_by(Project.updated_at.desc(), Project.id.desc()).all()

    @staticmethod
    def _check_name_available(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
        query = db.query(Project.id).filter(Project.name == name)
        if exclude_id is not None:
            query = query.filter(Project.id != exclude_id)
        if query.first():
            raise ValidationError("name has already been taken")

    def create_project(
            self,
            db: Session,
            name: str,
            description: Optional[str] = None,
            status: ProjectStatus = ProjectStatus.DRAFT
    ) -> Project:
        require_text(name, "name")
        status = coerce_enum(ProjectStatus, status, "status")
        self._check_name_available(db, name)

        project = Project(name=name, description=description, status=status)
        db.add(project)
        commit_or_raise(db, project_name=name)
        db.refresh(project)

        service_logger.info("Project created", extra={
            "project_id": project.id,
            "project_name": project.name,
            "status": project.status.value
        })
        return project

    def update_project(self, db: Session, project_id: int, **fields) -> Project:
        project = self.get_project(db, project_id)

        if "name" in fields:
            require_text(fields["name"], "name")
            self._check_name_available(db, fields["name"], exclude_id=project_id)
        if "status" in fields:
            fields["status"] = coerce_enum(ProjectStatus, fields["status"], "status")

        for field, value in fields.items():
            setattr(project, field, value)

        commit_or_raise(db, project_id=project_id)
        db.refresh(project)

        service_logger.info("Project updated", extra={
            "project_id": project_id,
            "update_fields": list(fields.keys())
        })
        return project

    def delete_project(self, db: Session, project_id: int) -> None:
        project = self.get_project(db, project_id)
        document_count = project.document_count

        db.delete(project)
        commit_or_raise(db, project_id=project_id)

        service_logger.info("Project deleted", extra={
            "project_id": project_id,
            "document_count": document_count
        })


project_service = ProjectService()
