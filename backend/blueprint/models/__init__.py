# backend/blueprint/models/__init__.py
from ..database import Base
from .project import Project, ProjectStatus
from .document import Document, DocumentType
from .version import Version, VersionStatus

__all__ = [
    "Base",
    "Project",
    "ProjectStatus",
    "Document",
    "DocumentType",
    "Version",
    "VersionStatus"
]
