from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import DocumentKind
from shared.exceptions import ConflictError
from versioning.domain.entities import Version
from versioning.infrastructure.models import DocumentVersionModel


class DbVersionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_document(self, document_id: UUID) -> list[Version]:
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_number.desc())
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, version_id: UUID) -> Version | None:
        result = await self.session.execute(
            select(DocumentVersionModel).where(DocumentVersionModel.id == version_id)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_by_number(self, document_id: UUID, version_number: int) -> Version | None:
        result = await self.session.execute(
            select(DocumentVersionModel).where(
                DocumentVersionModel.document_id == document_id,
                DocumentVersionModel.version_number == version_number,
            )
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_latest_number(self, document_id: UUID) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.max(DocumentVersionModel.version_number), 0))
            .where(DocumentVersionModel.document_id == document_id)
        )
        return result.scalar_one()

    async def create(self, version: Version) -> Version:
        model = DocumentVersionModel(
            document_id=version.document_id,
            document_kind=version.document_kind.value,
            version_number=version.version_number,
            title=version.title,
            content=version.content,
            description=version.description,
            status=version.status,
            author_id=version.author_id,
            change_description=version.change_description,
            is_archived=version.is_archived,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(
                f"Version {version.version_number} of document {version.document_id} already exists"
            )
        await self.session.refresh(model)
        return _to_entity(model)

    async def set_archived(self, version_id: UUID, archived: bool) -> Version | None:
        result = await self.session.execute(
            update(DocumentVersionModel)
            .where(DocumentVersionModel.id == version_id)
            .values(is_archived=archived)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            return None
        await self.session.commit()

        refreshed = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.id == version_id)
            .execution_options(populate_existing=True)
        )
        return _to_entity(refreshed.scalar_one())

    async def search(self, query: str) -> list[Version]:
        pattern = f"%{_escape_like(query)}%"
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(
                or_(
                    DocumentVersionModel.title.ilike(pattern, escape="\\"),
                    DocumentVersionModel.content.ilike(pattern, escape="\\"),
                    DocumentVersionModel.description.ilike(pattern, escape="\\"),
                )
            )
            .order_by(
                DocumentVersionModel.document_id,
                DocumentVersionModel.version_number.desc(),
            )
        )
        return [_to_entity(m) for m in result.scalars().all()]


def _to_entity(model: DocumentVersionModel) -> Version:
    return Version(
        id=model.id,
        document_id=model.document_id,
        document_kind=DocumentKind(model.document_kind),
        version_number=model.version_number,
        title=model.title,
        content=model.content,
        description=model.description,
        status=model.status,
        author_id=model.author_id,
        change_description=model.change_description,
        is_archived=model.is_archived,
        created_at=model.created_at,
    )


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
