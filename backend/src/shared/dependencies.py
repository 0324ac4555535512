from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.application.services import verify_token
from auth.domain.entities import Actor
from shared.infrastructure.database import async_session
from shared.infrastructure.redis import get_redis_pool
from versioning.infrastructure.version_cache import RedisVersionListCache

security = HTTPBearer()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    return verify_token(credentials.credentials)


def get_version_cache() -> RedisVersionListCache:
    return RedisVersionListCache(get_redis_pool())
