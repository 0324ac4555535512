from uuid import UUID

from documents.application.services import get_document, replace_content
from documents.domain.entities import DocumentStatus
from documents.domain.repository import DocumentRepository
from versioning.domain.entities import LiveContent, VersionPayload


class DocumentContentGateway:
    """Reads and writes live content through the documents context."""

    def __init__(self, documents: DocumentRepository):
        self.documents = documents

    async def get_current_content(self, document_id: UUID) -> LiveContent:
        doc = await get_document(self.documents, document_id)
        return LiveContent(
            document_id=doc.id,
            kind=doc.kind,
            owner_id=doc.owner_id,
            payload=VersionPayload(
                title=doc.title,
                content=doc.content,
                description=doc.description,
                status=doc.status.value,
            ),
            revision=doc.version,
        )

    async def apply_content(
        self, document_id: UUID, payload: VersionPayload, expected_revision: int
    ) -> None:
        await replace_content(
            self.documents,
            document_id,
            expected_version=expected_revision,
            title=payload.title,
            content=payload.content,
            description=payload.description,
            status=DocumentStatus(payload.status) if payload.status else DocumentStatus.DRAFT,
        )
