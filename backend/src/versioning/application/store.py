"""Version store operations: listing, appending, archive and restore."""

from uuid import UUID

from auth.domain.entities import Actor
from documents.domain.entities import DocumentKind
from shared.exceptions import ConflictError, NotFoundError
from shared.logging_config import get_logger
from versioning.application.audit import record_action
from versioning.domain import policy
from versioning.domain.entities import (
    AuditAction,
    HistoryView,
    Version,
    VersionPayload,
)
from versioning.domain.repository import (
    AuditLogRepository,
    LiveContentGateway,
    VersionListCache,
    VersionRepository,
)

logger = get_logger(__name__)


async def list_versions(
    repo: VersionRepository,
    document_id: UUID,
    view: HistoryView = HistoryView.ALL,
    cache: VersionListCache | None = None,
) -> list[Version]:
    """Newest first. An unknown document simply has no versions."""
    if cache is None:
        return policy.filter_view(await repo.list_for_document(document_id), view)

    versions = await cache.get(document_id)
    if versions is None:
        # Read before loading: a mutation committed meanwhile bumps it.
        generation = await cache.generation(document_id)
        versions = await repo.list_for_document(document_id)
        await cache.set(document_id, versions, generation)
    return policy.filter_view(versions, view)


async def get_version(
    repo: VersionRepository, document_id: UUID, version_number: int
) -> Version:
    version = await repo.get_by_number(document_id, version_number)
    if not version:
        raise NotFoundError("Version", f"{document_id} v{version_number}")
    return version


async def append_version(
    repo: VersionRepository,
    document_id: UUID,
    document_kind: DocumentKind,
    snapshot: VersionPayload,
    author_id: str,
    change_description: str | None = None,
    expected_latest: int | None = None,
    cache: VersionListCache | None = None,
) -> Version:
    """Record ``snapshot`` as the next version of the document.

    With ``expected_latest`` the append only goes through while that number
    is still the latest. A concurrent writer taking the same number is
    rejected by the store, so both cases raise ConflictError.
    """
    latest = await repo.get_latest_number(document_id)
    if expected_latest is not None and latest != expected_latest:
        raise ConflictError(
            f"Latest version of document {document_id} is {latest}, expected {expected_latest}"
        )

    version = Version(
        document_id=document_id,
        document_kind=document_kind,
        version_number=latest + 1,
        title=snapshot.title,
        content=snapshot.content,
        description=snapshot.description,
        status=snapshot.status,
        author_id=author_id,
        change_description=change_description,
    )
    try:
        saved = await repo.create(version)
    finally:
        if cache:
            await cache.invalidate(document_id)

    logger.info(
        "version_appended",
        document_id=str(document_id),
        version_number=saved.version_number,
        author_id=author_id,
    )
    return saved


async def save_version(
    repo: VersionRepository,
    live: LiveContentGateway,
    document_id: UUID,
    actor: Actor,
    change_description: str | None = None,
    audit: AuditLogRepository | None = None,
    cache: VersionListCache | None = None,
) -> Version:
    """Snapshot the live document as a new version."""
    current = await live.get_current_content(document_id)
    version = await append_version(
        repo,
        document_id,
        current.kind,
        current.payload,
        author_id=actor.id,
        change_description=change_description,
        cache=cache,
    )
    await record_action(
        audit,
        document_id,
        current.kind,
        AuditAction.CREATED,
        actor,
        to_version=version.version_number,
        details={"title": version.title, "change_description": change_description},
    )
    return version


async def _get_owned_version(
    repo: VersionRepository, version_id: UUID, document_id: UUID | None
) -> Version:
    version = await repo.get_by_id(version_id)
    if not version or (document_id is not None and version.document_id != document_id):
        raise NotFoundError("Version", str(version_id))
    return version


async def archive_version(
    repo: VersionRepository,
    version_id: UUID,
    actor: Actor,
    document_id: UUID | None = None,
    audit: AuditLogRepository | None = None,
    cache: VersionListCache | None = None,
) -> Version:
    version = await _get_owned_version(repo, version_id, document_id)
    if version.is_archived:
        return version

    latest = await repo.get_latest_number(version.document_id)
    policy.ensure_archivable(version, latest)

    archived = await _set_archived(repo, version, True, cache)
    logger.info(
        "version_archived",
        document_id=str(version.document_id),
        version_number=version.version_number,
        actor_id=actor.id,
    )
    await record_action(
        audit,
        version.document_id,
        version.document_kind,
        AuditAction.ARCHIVED,
        actor,
        to_version=version.version_number,
    )
    return archived


async def restore_version(
    repo: VersionRepository,
    version_id: UUID,
    actor: Actor,
    document_id: UUID | None = None,
    audit: AuditLogRepository | None = None,
    cache: VersionListCache | None = None,
) -> Version:
    version = await _get_owned_version(repo, version_id, document_id)
    if not version.is_archived:
        return version

    restored = await _set_archived(repo, version, False, cache)
    logger.info(
        "version_restored",
        document_id=str(version.document_id),
        version_number=version.version_number,
        actor_id=actor.id,
    )
    await record_action(
        audit,
        version.document_id,
        version.document_kind,
        AuditAction.RESTORED,
        actor,
        to_version=version.version_number,
    )
    return restored


async def _set_archived(
    repo: VersionRepository,
    version: Version,
    archived: bool,
    cache: VersionListCache | None,
) -> Version:
    try:
        updated = await repo.set_archived(version.id, archived)
    finally:
        if cache:
            await cache.invalidate(version.document_id)
    if not updated:
        raise NotFoundError("Version", str(version.id))
    return updated
