from uuid import UUID

from documents.domain.entities import Document, DocumentKind, DocumentStatus
from documents.domain.repository import DocumentRepository
from shared.exceptions import AuthorizationError, NotFoundError


async def create_document(
    repo: DocumentRepository,
    kind: DocumentKind,
    title: str,
    owner_id: str,
    content: str | None = None,
    description: str | None = None,
) -> Document:
    doc = Document(
        kind=kind,
        title=title,
        owner_id=owner_id,
        content=content,
        description=description,
    )
    return await repo.create(doc)


async def get_document(repo: DocumentRepository, document_id: UUID) -> Document:
    doc = await repo.get_by_id(document_id)
    if not doc:
        raise NotFoundError("Document", str(document_id))
    return doc


async def list_documents(
    repo: DocumentRepository, kind: DocumentKind | None = None
) -> list[Document]:
    return await repo.list_all(kind)


async def update_document(
    repo: DocumentRepository,
    document_id: UUID,
    expected_version: int,
    title: str | None = None,
    content: str | None = None,
    description: str | None = None,
    status: DocumentStatus | None = None,
) -> Document:
    doc = await get_document(repo, document_id)

    if title is not None:
        doc.title = title
    if content is not None:
        doc.content = content
    if description is not None:
        doc.description = description
    if status is not None:
        doc.status = status

    return await repo.update(doc, expected_version)


async def replace_content(
    repo: DocumentRepository,
    document_id: UUID,
    expected_version: int,
    title: str,
    content: str | None,
    description: str | None,
    status: DocumentStatus,
) -> Document:
    """Overwrite every payload field, including clearing the optional ones."""
    doc = await get_document(repo, document_id)
    doc.title = title
    doc.content = content
    doc.description = description
    doc.status = status
    return await repo.update(doc, expected_version)


async def delete_document(
    repo: DocumentRepository, document_id: UUID, user_id: str
) -> None:
    doc = await get_document(repo, document_id)
    if doc.owner_id != user_id:
        raise AuthorizationError("Only the document owner can delete it")
    await repo.delete(document_id)
