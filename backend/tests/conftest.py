import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from auth.application.services import issue_token
from auth.domain.entities import Actor
from main import app
from shared.dependencies import get_db, get_version_cache
from shared.infrastructure.database import Base
from versioning.infrastructure.version_cache import RedisVersionListCache

import documents.infrastructure.models  # noqa: F401
import versioning.infrastructure.models  # noqa: F401


class FakeRedis:
    """Dict-backed double for the redis.asyncio calls the version cache makes."""

    def __init__(self):
        self.store: dict[str, bytes] = {}

    async def get(self, key: str):
        return self.store.get(key)

    async def mget(self, *keys: str):
        return [self.store.get(key) for key in keys]

    async def set(self, key: str, value, ex: int | None = None):
        self.store[key] = value if isinstance(value, bytes) else str(value).encode()

    async def incr(self, key: str) -> int:
        value = int(self.store.get(key, b"0")) + 1
        self.store[key] = str(value).encode()
        return value

    async def delete(self, *keys: str):
        for key in keys:
            self.store.pop(key, None)


def create_headers(actor_id: str = "alice", name: str | None = "Alice Smith") -> dict:
    """Bearer headers for a token issued to ``actor_id``."""
    token = issue_token(Actor(id=actor_id, name=name))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_engine(tmp_path):
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def actor() -> Actor:
    return Actor(id="alice", name="Alice Smith")


@pytest.fixture
def auth_headers() -> dict:
    return create_headers()


@pytest.fixture
async def db(test_engine):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def version_cache(fake_redis) -> RedisVersionListCache:
    return RedisVersionListCache(fake_redis)


@pytest.fixture(autouse=True)
async def override_dependencies(test_engine, version_cache):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override
    app.dependency_overrides[get_version_cache] = lambda: version_cache
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
