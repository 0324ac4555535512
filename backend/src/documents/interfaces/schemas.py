from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from documents.domain.entities import DocumentKind, DocumentStatus


class CreateDocumentRequest(BaseModel):
    kind: DocumentKind = DocumentKind.PAGE
    title: str = Field(min_length=1, max_length=500)
    content: str | None = None
    description: str | None = None


class UpdateDocumentRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = None
    description: str | None = None
    status: DocumentStatus | None = None
    expected_version: int


class DocumentResponse(BaseModel):
    id: UUID
    kind: DocumentKind
    title: str
    content: str | None = None
    description: str | None = None
    status: DocumentStatus
    owner_id: str
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
