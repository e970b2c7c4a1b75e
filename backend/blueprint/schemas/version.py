# backend/blueprint/schemas/version.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .base import BaseSchema, TimestampMixin
from ..models.version import VersionStatus


class VersionCommit(BaseModel):
    commit_message: Optional[str] = Field(default=None, max_length=255)


class Version(BaseSchema, TimestampMixin):
    id: int
    document_id: int
    version_number: int
    content: Optional[str] = None
    commit_message: Optional[str] = None
    committed_at: Optional[datetime] = None
    status: VersionStatus
