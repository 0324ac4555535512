from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from documents.domain.entities import DocumentKind


@dataclass(frozen=True)
class VersionPayload:
    title: str
    content: str | None = None
    description: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class Version:
    """One immutable snapshot of a document. Only ``is_archived`` ever changes."""

    document_id: UUID
    document_kind: DocumentKind
    version_number: int
    title: str
    author_id: str
    content: str | None = None
    description: str | None = None
    status: str | None = None
    change_description: str | None = None
    is_archived: bool = False
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)

    @property
    def payload(self) -> VersionPayload:
        return VersionPayload(
            title=self.title,
            content=self.content,
            description=self.description,
            status=self.status,
        )


@dataclass(frozen=True)
class LiveContent:
    """Current state of the live document, read right before a checkpoint."""

    document_id: UUID
    kind: DocumentKind
    owner_id: str
    payload: VersionPayload
    revision: int


class HistoryView(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass
class VersionHistory:
    active: list[Version]
    archived: list[Version]


class AuditAction(StrEnum):
    CREATED = "created"
    REVERTED = "reverted"
    ARCHIVED = "archived"
    RESTORED = "restored"


@dataclass
class VersionAuditLog:
    document_id: UUID
    document_kind: DocumentKind
    action: AuditAction
    actor_id: str
    actor_name: str | None = None
    from_version: int | None = None
    to_version: int | None = None
    details: dict[str, Any] | None = None
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)


class DiffOp(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass
class DiffSegment:
    op: DiffOp
    text: str


@dataclass
class VersionComparison:
    older: Version
    newer: Version
    title_changed: bool
    content_changed: bool
    description_changed: bool
    status_changed: bool
    content_diff: list[DiffSegment]


@dataclass
class VersionSearchHit:
    version: Version
    display_label: str
