from typing import Protocol
from uuid import UUID

from versioning.domain.entities import LiveContent, Version, VersionAuditLog, VersionPayload


class VersionRepository(Protocol):
    async def list_for_document(self, document_id: UUID) -> list[Version]: ...

    async def get_by_id(self, version_id: UUID) -> Version | None: ...

    async def get_by_number(self, document_id: UUID, version_number: int) -> Version | None: ...

    async def get_latest_number(self, document_id: UUID) -> int: ...

    async def create(self, version: Version) -> Version: ...

    async def set_archived(self, version_id: UUID, archived: bool) -> Version | None: ...

    async def search(self, query: str) -> list[Version]: ...


class AuditLogRepository(Protocol):
    async def create(self, entry: VersionAuditLog) -> VersionAuditLog: ...

    async def list_for_document(self, document_id: UUID) -> list[VersionAuditLog]: ...

    async def list_all(self, limit: int, offset: int) -> list[VersionAuditLog]: ...


class LiveContentGateway(Protocol):
    """Read/write access to the live document a version history belongs to.

    The live state may differ from the latest stored version when edits were
    saved without snapshotting.
    """

    async def get_current_content(self, document_id: UUID) -> LiveContent: ...

    async def apply_content(
        self, document_id: UUID, payload: VersionPayload, expected_revision: int
    ) -> None: ...


class VersionListCache(Protocol):
    async def generation(self, document_id: UUID) -> int: ...

    async def get(self, document_id: UUID) -> list[Version] | None: ...

    async def set(self, document_id: UUID, versions: list[Version], generation: int) -> None: ...

    async def invalidate(self, document_id: UUID) -> None: ...
