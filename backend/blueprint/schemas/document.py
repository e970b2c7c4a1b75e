# backend/blueprint/schemas/document.py
from typing import Optional, List

from pydantic import Field

from .base import BaseSchema, TimestampMixin
from .version import Version
from ..models.document import DocumentType

class DocumentBase(BaseSchema):
    title: str = Field(max_length=255)
    content: Optional[str] = ""
    document_type: DocumentType = DocumentType.SPECIFICATION

class DocumentCreate(DocumentBase):
    project_id: int

class DocumentUpdate(BaseSchema):
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    document_type: Optional[DocumentType] = None

class Document(DocumentBase, TimestampMixin):
    id: int
    project_id: int

class DocumentDetail(Document):
    version_count: int = 0
    current_version: Optional[Version] = None
    versions: List[Version] = []
