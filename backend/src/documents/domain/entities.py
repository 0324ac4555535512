from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class DocumentKind(StrEnum):
    PAGE = "page"
    BOOK = "book"


class DocumentStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@dataclass
class Document:
    kind: DocumentKind
    title: str
    owner_id: str
    content: str | None = None
    description: str | None = None
    status: DocumentStatus = DocumentStatus.DRAFT
    version: int = 1
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)
