from uuid import uuid4

import pytest

from documents.application.services import delete_document
from documents.domain.entities import DocumentKind
from shared.exceptions import ConflictError, InvalidOperationError, NotFoundError
from versioning.application.store import (
    append_version,
    archive_version,
    get_version,
    list_versions,
    restore_version,
    save_version,
)
from versioning.domain.entities import AuditAction, HistoryView, VersionPayload
from versioning.infrastructure.version_repository import DbVersionRepository


async def test_list_unknown_document_is_empty(versions):
    assert await list_versions(versions, uuid4()) == []


async def test_list_is_newest_first_without_duplicates(versions, page_with_history):
    listed = await list_versions(versions, page_with_history.id)
    numbers = [v.version_number for v in listed]
    assert numbers == [3, 2, 1]
    assert len(set(numbers)) == len(numbers)


async def test_append_assigns_next_number(versions, page):
    payload = VersionPayload(title="T", content="c", status="draft")

    first = await append_version(versions, page.id, DocumentKind.PAGE, payload, author_id="alice")
    second = await append_version(versions, page.id, DocumentKind.PAGE, payload, author_id="bob")

    assert first.version_number == 1
    assert second.version_number == 2
    assert second.author_id == "bob"
    assert second.created_at is not None
    assert second.is_archived is False


async def test_append_respects_expected_latest(versions, page_with_history):
    payload = VersionPayload(title="T")
    with pytest.raises(ConflictError):
        await append_version(
            versions, page_with_history.id, DocumentKind.PAGE, payload,
            author_id="alice", expected_latest=2,
        )
    appended = await append_version(
        versions, page_with_history.id, DocumentKind.PAGE, payload,
        author_id="alice", expected_latest=3,
    )
    assert appended.version_number == 4


async def test_duplicate_number_is_a_conflict(versions, page_with_history):
    existing = await get_version(versions, page_with_history.id, 3)
    with pytest.raises(ConflictError):
        await versions.create(existing)
    assert await versions.get_latest_number(page_with_history.id) == 3


async def test_save_version_snapshots_live_content(versions, live, audit, page, actor):
    version = await save_version(
        versions, live, page.id, actor, change_description="initial", audit=audit
    )
    assert version.version_number == 1
    assert version.title == page.title
    assert version.content == page.content
    assert version.status == "draft"
    assert version.change_description == "initial"

    logs = await audit.list_for_document(page.id)
    assert [log.action for log in logs] == [AuditAction.CREATED]
    assert logs[0].to_version == 1
    assert logs[0].actor_name == "Alice Smith"


async def test_save_version_unknown_document(versions, live, actor):
    with pytest.raises(NotFoundError):
        await save_version(versions, live, uuid4(), actor)


async def test_get_version_not_found(versions, page_with_history):
    with pytest.raises(NotFoundError):
        await get_version(versions, page_with_history.id, 42)


async def test_archive_and_restore(versions, audit, page_with_history, actor):
    v2 = await get_version(versions, page_with_history.id, 2)

    archived = await archive_version(versions, v2.id, actor, audit=audit)
    assert archived.is_archived is True
    assert archived.content == v2.content

    active = await list_versions(versions, page_with_history.id, view=HistoryView.ACTIVE)
    assert [v.version_number for v in active] == [3, 1]
    archived_view = await list_versions(versions, page_with_history.id, view=HistoryView.ARCHIVED)
    assert [v.version_number for v in archived_view] == [2]

    restored = await restore_version(versions, v2.id, actor, audit=audit)
    assert restored.is_archived is False

    actions = {log.action for log in await audit.list_for_document(page_with_history.id)}
    assert actions == {AuditAction.ARCHIVED, AuditAction.RESTORED}


async def test_archive_is_idempotent(versions, audit, page_with_history, actor):
    v1 = await get_version(versions, page_with_history.id, 1)

    once = await archive_version(versions, v1.id, actor, audit=audit)
    twice = await archive_version(versions, v1.id, actor, audit=audit)

    assert once == twice
    assert len(await audit.list_for_document(page_with_history.id)) == 1


async def test_restore_of_active_version_is_a_no_op(versions, page_with_history, actor):
    v1 = await get_version(versions, page_with_history.id, 1)
    assert await restore_version(versions, v1.id, actor) == v1


async def test_latest_cannot_be_archived(versions, page_with_history, actor):
    latest = await get_version(versions, page_with_history.id, 3)
    with pytest.raises(InvalidOperationError):
        await archive_version(versions, latest.id, actor)
    assert (await get_version(versions, page_with_history.id, 3)).is_archived is False


async def test_archive_unknown_version(versions, actor):
    with pytest.raises(NotFoundError):
        await archive_version(versions, uuid4(), actor)
    with pytest.raises(NotFoundError):
        await restore_version(versions, uuid4(), actor)


async def test_archive_checks_owning_document(versions, page_with_history, actor):
    v1 = await get_version(versions, page_with_history.id, 1)
    with pytest.raises(NotFoundError):
        await archive_version(versions, v1.id, actor, document_id=uuid4())


async def test_listing_cache_is_invalidated_by_mutations(
    versions, live, page_with_history, actor, version_cache
):
    cached = await list_versions(versions, page_with_history.id, cache=version_cache)
    assert await version_cache.get(page_with_history.id) == cached

    await save_version(versions, live, page_with_history.id, actor, cache=version_cache)
    assert await version_cache.get(page_with_history.id) is None
    relisted = await list_versions(versions, page_with_history.id, cache=version_cache)
    assert [v.version_number for v in relisted] == [4, 3, 2, 1]

    v1 = relisted[-1]
    await archive_version(versions, v1.id, actor, cache=version_cache)
    relisted = await list_versions(versions, page_with_history.id, cache=version_cache)
    assert relisted[-1].is_archived is True


class SaveDuringListingRepository(DbVersionRepository):
    """Commits another save after a listing is loaded but before it is cached."""

    def __init__(self, session, live, actor, cache):
        super().__init__(session)
        self.live = live
        self.actor = actor
        self.cache = cache
        self.pending_saves = 1

    async def list_for_document(self, document_id):
        listing = await super().list_for_document(document_id)
        if self.pending_saves:
            self.pending_saves -= 1
            await save_version(self, self.live, document_id, self.actor, cache=self.cache)
        return listing


async def test_listing_loaded_before_a_save_is_not_cached(
    db, versions, live, page_with_history, actor, version_cache
):
    racing = SaveDuringListingRepository(db, live, actor, version_cache)

    first = await list_versions(racing, page_with_history.id, cache=version_cache)
    assert [v.version_number for v in first] == [3, 2, 1]

    second = await list_versions(versions, page_with_history.id, cache=version_cache)
    assert [v.version_number for v in second] == [4, 3, 2, 1]


async def test_versions_survive_document_deletion(versions, documents, page_with_history):
    await delete_document(documents, page_with_history.id, user_id="alice")

    listed = await list_versions(versions, page_with_history.id)
    assert [v.version_number for v in listed] == [3, 2, 1]
