# backend/blueprint/services/__init__.py
from .projects import project_service
from .versioning import versioning_service

__all__ = ["project_service", "versioning_service"]
