from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import Document, DocumentKind, DocumentStatus
from documents.infrastructure.models import DocumentModel
from shared.exceptions import ConflictError


class DbDocumentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID) -> Document | None:
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_all(self, kind: DocumentKind | None = None) -> list[Document]:
        query = select(DocumentModel).order_by(DocumentModel.created_at.desc())
        if kind is not None:
            query = query.where(DocumentModel.kind == kind.value)
        result = await self.session.execute(query)
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, document: Document) -> Document:
        model = DocumentModel(
            kind=document.kind.value,
            title=document.title,
            content=document.content,
            description=document.description,
            status=document.status.value,
            owner_id=document.owner_id,
        )
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return _to_entity(model)

    async def update(self, document: Document, expected_version: int) -> Document:
        result = await self.session.execute(
            update(DocumentModel)
            .where(
                DocumentModel.id == document.id,
                DocumentModel.version == expected_version,
            )
            .values(
                title=document.title,
                content=document.content,
                description=document.description,
                status=document.status.value,
                version=expected_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise ConflictError("Document was modified by another user")

        await self.session.commit()

        refreshed = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document.id)
            .execution_options(populate_existing=True)
        )
        return _to_entity(refreshed.scalar_one())

    async def delete(self, document_id: UUID) -> None:
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        model = result.scalar_one_or_none()
        if model:
            await self.session.delete(model)
            await self.session.commit()


def _to_entity(model: DocumentModel) -> Document:
    return Document(
        id=model.id,
        kind=DocumentKind(model.kind),
        title=model.title,
        content=model.content,
        description=model.description,
        status=DocumentStatus(model.status),
        owner_id=model.owner_id,
        version=model.version,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
