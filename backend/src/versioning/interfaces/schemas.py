from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from documents.domain.entities import DocumentKind
from documents.interfaces.schemas import DocumentResponse
from versioning.domain.entities import AuditAction, DiffOp


class SaveVersionRequest(BaseModel):
    change_description: str | None = Field(default=None, max_length=2000)


class RevertRequest(BaseModel):
    expected_latest: int | None = Field(default=None, ge=0)


class VersionResponse(BaseModel):
    id: UUID
    document_id: UUID
    document_kind: DocumentKind
    version_number: int
    title: str
    content: str | None = None
    description: str | None = None
    status: str | None = None
    author_id: str
    change_description: str | None = None
    is_archived: bool
    created_at: datetime | None = None


class RevertResponse(BaseModel):
    checkpoint: VersionResponse
    target_version_number: int
    document: DocumentResponse


class DiffSegmentResponse(BaseModel):
    op: DiffOp
    text: str


class VersionComparisonResponse(BaseModel):
    older: VersionResponse
    newer: VersionResponse
    title_changed: bool
    content_changed: bool
    description_changed: bool
    status_changed: bool
    content_diff: list[DiffSegmentResponse]


class VersionSearchHitResponse(BaseModel):
    version: VersionResponse
    display_label: str


class VersionSearchResponse(BaseModel):
    page_versions: list[VersionSearchHitResponse]
    book_versions: list[VersionSearchHitResponse]


class AuditLogResponse(BaseModel):
    id: UUID
    document_id: UUID
    document_kind: DocumentKind
    action: AuditAction
    from_version: int | None = None
    to_version: int | None = None
    actor_id: str
    actor_name: str | None = None
    details: dict[str, Any] | None = None
    created_at: datetime | None = None
