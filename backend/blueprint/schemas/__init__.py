# backend/blueprint/schemas/__init__.py
from .project import Project, ProjectCreate, ProjectUpdate, ProjectDetail
from .document import Document, DocumentCreate, DocumentUpdate, DocumentDetail
from .version import Version, VersionCommit

__all__ = [
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectDetail",
    "Document", "DocumentCreate", "DocumentUpdate", "DocumentDetail",
    "Version", "VersionCommit"
]
