from dataclasses import dataclass
from uuid import UUID

from pydantic import TypeAdapter
from redis.asyncio import Redis

from shared.config import settings
from versioning.domain.entities import Version


@dataclass
class _CachedListing:
    generation: int
    versions: list[Version]


_listing_adapter = TypeAdapter(_CachedListing)


def _cache_key(document_id: UUID) -> str:
    return f"doc:{document_id}:versions"


def _generation_key(document_id: UUID) -> str:
    return f"doc:{document_id}:versions:gen"


class RedisVersionListCache:
    """Newest-first version listings per document, dropped on every mutation.

    Each listing is stamped with the document's generation counter, read
    before the listing was loaded. ``invalidate`` bumps the counter, so a
    listing filled while a mutation was committing is never served.
    """

    def __init__(self, redis: Redis, ttl_seconds: int | None = None):
        self.redis = redis
        self.ttl_seconds = ttl_seconds or settings.VERSION_CACHE_TTL_SECONDS

    async def generation(self, document_id: UUID) -> int:
        return int(await self.redis.get(_generation_key(document_id)) or 0)

    async def get(self, document_id: UUID) -> list[Version] | None:
        raw, current = await self.redis.mget(
            _cache_key(document_id), _generation_key(document_id)
        )
        if raw is None:
            return None
        listing = _listing_adapter.validate_json(raw)
        if listing.generation != int(current or 0):
            return None
        return listing.versions

    async def set(self, document_id: UUID, versions: list[Version], generation: int) -> None:
        await self.redis.set(
            _cache_key(document_id),
            _listing_adapter.dump_json(_CachedListing(generation, versions)),
            ex=self.ttl_seconds,
        )

    async def invalidate(self, document_id: UUID) -> None:
        await self.redis.incr(_generation_key(document_id))
        await self.redis.delete(_cache_key(document_id))
