from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from auth.domain.entities import Actor
from documents.application.services import get_document
from documents.domain.entities import DocumentKind
from documents.infrastructure.document_repository import DbDocumentRepository
from shared.config import settings
from shared.dependencies import get_current_actor, get_db, get_version_cache
from versioning.application.audit import list_audit_logs, list_document_audit_logs
from versioning.application.compare import compare_versions
from versioning.application.revert import apply_revert, revert_to
from versioning.application.search import search_versions
from versioning.application.store import (
    archive_version,
    get_version,
    list_versions,
    restore_version,
    save_version,
)
from versioning.domain.entities import HistoryView
from versioning.domain.repository import VersionListCache
from versioning.infrastructure.audit_repository import DbAuditLogRepository
from versioning.infrastructure.live_content import DocumentContentGateway
from versioning.infrastructure.version_repository import DbVersionRepository
from versioning.interfaces.schemas import (
    AuditLogResponse,
    RevertRequest,
    RevertResponse,
    SaveVersionRequest,
    VersionComparisonResponse,
    VersionResponse,
    VersionSearchResponse,
)

router = APIRouter(prefix="/api/documents", tags=["versions"])
search_router = APIRouter(prefix="/api", tags=["versions"])


@router.get("/{document_id}/versions", response_model=list[VersionResponse])
async def list_for_document(
    document_id: UUID,
    view: HistoryView = HistoryView.ALL,
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
    cache: VersionListCache = Depends(get_version_cache),
):
    return await list_versions(DbVersionRepository(db), document_id, view=view, cache=cache)


@router.post("/{document_id}/versions", response_model=VersionResponse, status_code=201)
async def save(
    document_id: UUID,
    body: SaveVersionRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
    cache: VersionListCache = Depends(get_version_cache),
):
    return await save_version(
        DbVersionRepository(db),
        DocumentContentGateway(DbDocumentRepository(db)),
        document_id,
        actor,
        change_description=body.change_description,
        audit=DbAuditLogRepository(db),
        cache=cache,
    )


@router.get("/{document_id}/versions/{version_number}", response_model=VersionResponse)
async def get_one(
    document_id: UUID,
    version_number: int,
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    return await get_version(DbVersionRepository(db), document_id, version_number)


@router.post("/{document_id}/revert/{version_number}", response_model=RevertResponse)
async def revert(
    document_id: UUID,
    version_number: int,
    body: RevertRequest | None = None,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
    cache: VersionListCache = Depends(get_version_cache),
):
    documents = DbDocumentRepository(db)
    checkpoint = await revert_to(
        DbVersionRepository(db),
        DocumentContentGateway(documents),
        document_id,
        version_number,
        actor,
        expected_latest=body.expected_latest if body else None,
        audit=DbAuditLogRepository(db),
        cache=cache,
    )
    return {
        "checkpoint": checkpoint,
        "target_version_number": version_number,
        "document": await get_document(documents, document_id),
    }


@router.post("/{document_id}/revert/{version_number}/apply", status_code=204)
async def reapply(
    document_id: UUID,
    version_number: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    await apply_revert(
        DbVersionRepository(db),
        DocumentContentGateway(DbDocumentRepository(db)),
        document_id,
        version_number,
        actor,
        audit=DbAuditLogRepository(db),
    )


@router.post("/{document_id}/versions/{version_id}/archive", response_model=VersionResponse)
async def archive(
    document_id: UUID,
    version_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
    cache: VersionListCache = Depends(get_version_cache),
):
    return await archive_version(
        DbVersionRepository(db),
        version_id,
        actor,
        document_id=document_id,
        audit=DbAuditLogRepository(db),
        cache=cache,
    )


@router.post("/{document_id}/versions/{version_id}/restore", response_model=VersionResponse)
async def restore(
    document_id: UUID,
    version_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
    cache: VersionListCache = Depends(get_version_cache),
):
    return await restore_version(
        DbVersionRepository(db),
        version_id,
        actor,
        document_id=document_id,
        audit=DbAuditLogRepository(db),
        cache=cache,
    )


@router.get(
    "/{document_id}/compare/{version_a}/{version_b}",
    response_model=VersionComparisonResponse,
)
async def compare(
    document_id: UUID,
    version_a: int,
    version_b: int,
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    return await compare_versions(DbVersionRepository(db), document_id, version_a, version_b)


@router.get("/{document_id}/audit-logs", response_model=list[AuditLogResponse])
async def document_audit_logs(
    document_id: UUID,
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    return await list_document_audit_logs(DbAuditLogRepository(db), document_id)


@search_router.get("/versions/search", response_model=VersionSearchResponse)
async def search(
    q: str = Query(min_length=1),
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    results = await search_versions(DbVersionRepository(db), q)
    return {
        "page_versions": results[DocumentKind.PAGE],
        "book_versions": results[DocumentKind.BOOK],
    }


@search_router.get("/version-audit-logs", response_model=list[AuditLogResponse])
async def audit_logs(
    limit: int = Query(default=100, ge=1, le=settings.AUDIT_LOG_MAX_LIMIT),
    offset: int = Query(default=0, ge=0),
    _: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    return await list_audit_logs(DbAuditLogRepository(db), limit=limit, offset=offset)
