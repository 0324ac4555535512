from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import DocumentKind
from versioning.domain.entities import AuditAction, VersionAuditLog
from versioning.infrastructure.models import VersionAuditLogModel


class DbAuditLogRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: VersionAuditLog) -> VersionAuditLog:
        model = VersionAuditLogModel(
            document_id=entry.document_id,
            document_kind=entry.document_kind.value,
            action=entry.action.value,
            from_version=entry.from_version,
            to_version=entry.to_version,
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            details=entry.details,
        )
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return _to_entity(model)

    async def list_for_document(self, document_id: UUID) -> list[VersionAuditLog]:
        result = await self.session.execute(
            select(VersionAuditLogModel)
            .where(VersionAuditLogModel.document_id == document_id)
            .order_by(VersionAuditLogModel.created_at.desc())
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def list_all(self, limit: int, offset: int) -> list[VersionAuditLog]:
        result = await self.session.execute(
            select(VersionAuditLogModel)
            .order_by(VersionAuditLogModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [_to_entity(m) for m in result.scalars().all()]


def _to_entity(model: VersionAuditLogModel) -> VersionAuditLog:
    return VersionAuditLog(
        id=model.id,
        document_id=model.document_id,
        document_kind=DocumentKind(model.document_kind),
        action=AuditAction(model.action),
        from_version=model.from_version,
        to_version=model.to_version,
        actor_id=model.actor_id,
        actor_name=model.actor_name,
        details=model.details,
        created_at=model.created_at,
    )
