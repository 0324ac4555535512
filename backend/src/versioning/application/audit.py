from typing import Any
from uuid import UUID

from auth.domain.entities import Actor
from documents.domain.entities import DocumentKind
from shared.config import settings
from versioning.domain.entities import AuditAction, VersionAuditLog
from versioning.domain.repository import AuditLogRepository


async def record_action(
    repo: AuditLogRepository | None,
    document_id: UUID,
    document_kind: DocumentKind,
    action: AuditAction,
    actor: Actor,
    from_version: int | None = None,
    to_version: int | None = None,
    details: dict[str, Any] | None = None,
) -> VersionAuditLog | None:
    if repo is None:
        return None
    entry = VersionAuditLog(
        document_id=document_id,
        document_kind=document_kind,
        action=action,
        actor_id=actor.id,
        actor_name=actor.name,
        from_version=from_version,
        to_version=to_version,
        details=details,
    )
    return await repo.create(entry)


async def list_document_audit_logs(
    repo: AuditLogRepository, document_id: UUID
) -> list[VersionAuditLog]:
    return await repo.list_for_document(document_id)


async def list_audit_logs(
    repo: AuditLogRepository, limit: int = 100, offset: int = 0
) -> list[VersionAuditLog]:
    limit = max(1, min(limit, settings.AUDIT_LOG_MAX_LIMIT))
    return await repo.list_all(limit=limit, offset=max(0, offset))
