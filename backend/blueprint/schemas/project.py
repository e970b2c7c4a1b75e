# backend/blueprint/schemas/project.py
from typing import Optional

from pydantic import Field

from .base import BaseSchema, TimestampMixin
from .document import Document
from ..models.project import ProjectStatus

class ProjectBase(BaseSchema):
    name: str = Field(max_length=255)
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.DRAFT

class ProjectCreate(ProjectBase):
    pass

class ProjectUpdate(BaseSchema):
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None

class Project(ProjectBase, TimestampMixin):
    id: int

class ProjectDetail(Project):
    document_count: int = 0
    latest_document: Optional[Document] = None
