import pytest

from documents.application.services import create_document, update_document
from documents.domain.entities import DocumentKind, DocumentStatus
from documents.infrastructure.document_repository import DbDocumentRepository
from versioning.application.store import save_version
from versioning.infrastructure.audit_repository import DbAuditLogRepository
from versioning.infrastructure.live_content import DocumentContentGateway
from versioning.infrastructure.version_repository import DbVersionRepository

HISTORY = [
    ("Onboarding", "Welcome to the team", DocumentStatus.DRAFT),
    ("Onboarding guide", "Welcome to the support team", DocumentStatus.DRAFT),
    ("Onboarding guide", "Welcome to the support team. Read the wiki first", DocumentStatus.PUBLISHED),
]


@pytest.fixture
def documents(db):
    return DbDocumentRepository(db)


@pytest.fixture
def versions(db):
    return DbVersionRepository(db)


@pytest.fixture
def audit(db):
    return DbAuditLogRepository(db)


@pytest.fixture
def live(documents):
    return DocumentContentGateway(documents)


@pytest.fixture
async def page(documents):
    title, content, _ = HISTORY[0]
    return await create_document(
        documents, kind=DocumentKind.PAGE, title=title, owner_id="alice", content=content
    )


@pytest.fixture
async def page_with_history(documents, versions, live, page, actor):
    """A page saved three times: versions 1, 2, 3, with v3 matching the live content."""
    await save_version(versions, live, page.id, actor, change_description="first draft")
    for revision, (title, content, status) in enumerate(HISTORY[1:], start=1):
        await update_document(
            documents,
            page.id,
            expected_version=revision,
            title=title,
            content=content,
            status=status,
        )
        await save_version(versions, live, page.id, actor)
    return page
