from datetime import datetime, timezone
from uuid import uuid4

import pytest

from documents.application.services import create_document
from documents.domain.entities import DocumentKind
from shared.exceptions import InvalidOperationError, NotFoundError
from versioning.application.compare import compare_versions, word_diff
from versioning.application.search import display_label, search_versions
from versioning.application.store import archive_version, get_version, save_version
from versioning.domain.entities import DiffOp, DiffSegment, Version


def test_word_diff_marks_replaced_words():
    assert word_diff("a b c", "a x c") == [
        DiffSegment(DiffOp.UNCHANGED, "a"),
        DiffSegment(DiffOp.REMOVED, "b"),
        DiffSegment(DiffOp.ADDED, "x"),
        DiffSegment(DiffOp.UNCHANGED, "c"),
    ]


def test_word_diff_handles_missing_content():
    assert word_diff(None, "hello world") == [DiffSegment(DiffOp.ADDED, "hello world")]
    assert word_diff("gone", None) == [DiffSegment(DiffOp.REMOVED, "gone")]
    assert word_diff("same text", "same text") == [DiffSegment(DiffOp.UNCHANGED, "same text")]


async def test_compare_is_always_old_to_new(versions, page_with_history):
    forward = await compare_versions(versions, page_with_history.id, 1, 3)
    backward = await compare_versions(versions, page_with_history.id, 3, 1)

    assert backward == forward
    assert forward.older.version_number == 1
    assert forward.newer.version_number == 3
    assert forward.title_changed is True
    assert forward.content_changed is True
    assert forward.status_changed is True
    assert forward.description_changed is False
    assert forward.content_diff[0] == DiffSegment(DiffOp.UNCHANGED, "Welcome to the")


async def test_compare_adjacent_versions(versions, page_with_history):
    result = await compare_versions(versions, page_with_history.id, 2, 3)
    assert result.title_changed is False
    added = [s.text for s in result.content_diff if s.op == DiffOp.ADDED]
    assert added == ["team. Read the wiki first"]


async def test_compare_unknown_version(versions, page_with_history):
    with pytest.raises(NotFoundError):
        await compare_versions(versions, page_with_history.id, 1, 9)


def test_display_labels():
    base = dict(
        document_id=uuid4(),
        document_kind=DocumentKind.PAGE,
        version_number=7,
        title="t",
        author_id="alice",
        created_at=datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc),
    )
    assert display_label(Version(**base)) == "[Legacy Version - v7]"
    assert display_label(Version(**base, is_archived=True)) == "[Archived - Last Updated: 2026-03-14]"


async def test_search_groups_by_kind(versions, live, documents, page_with_history, actor):
    book = await create_document(
        documents,
        kind=DocumentKind.BOOK,
        title="Support handbook",
        owner_id="alice",
        content="Escalation paths for the team",
    )
    await save_version(versions, live, book.id, actor)

    results = await search_versions(versions, "TEAM")

    assert [hit.version.version_number for hit in results[DocumentKind.PAGE]] == [3, 2, 1]
    assert [hit.version.document_id for hit in results[DocumentKind.BOOK]] == [book.id]
    assert results[DocumentKind.BOOK][0].display_label == "[Legacy Version - v1]"


async def test_search_labels_archived_versions(versions, page_with_history, actor):
    v1 = await get_version(versions, page_with_history.id, 1)
    await archive_version(versions, v1.id, actor)

    results = await search_versions(versions, "onboarding")

    labels = {hit.version.version_number: hit.display_label for hit in results[DocumentKind.PAGE]}
    assert labels[1].startswith("[Archived - Last Updated: ")
    assert labels[3] == "[Legacy Version - v3]"
    assert results[DocumentKind.BOOK] == []


async def test_search_matches_only_relevant_versions(versions, page_with_history):
    results = await search_versions(versions, "wiki")
    assert [hit.version.version_number for hit in results[DocumentKind.PAGE]] == [3]


async def test_search_rejects_blank_query(versions):
    with pytest.raises(InvalidOperationError):
        await search_versions(versions, "   ")


async def test_search_treats_wildcards_literally(versions, live, documents, page_with_history, actor):
    book = await create_document(
        documents,
        kind=DocumentKind.BOOK,
        title="SLA handbook",
        owner_id="alice",
        content="Uptime target is 100% with 1000 monitored hosts",
    )
    await save_version(versions, live, book.id, actor)
    other = await create_document(
        documents, kind=DocumentKind.BOOK, title="Capacity", owner_id="alice", content="Plan for 1000 users"
    )
    await save_version(versions, live, other.id, actor)

    assert await search_versions(versions, "_") == {DocumentKind.PAGE: [], DocumentKind.BOOK: []}

    results = await search_versions(versions, "100%")
    assert [hit.version.document_id for hit in results[DocumentKind.BOOK]] == [book.id]
