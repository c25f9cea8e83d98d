"""
云主机服务测试基础配置

提供 SQLite in-memory 异步数据库、mock Redis、FastAPI 测试客户端等通用 fixture。
每个测试使用独立的内存数据库，不依赖外部 PostgreSQL/Redis。
"""
import os
from datetime import date
from typing import AsyncGenerator

# 必须在导入 cloudhost 之前设置环境变量，避免真实连接
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_HOST"] = "localhost"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["API_KEY"] = "test-api-key"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cloudhost.core.database import Base, get_db
from cloudhost.core.security import create_access_token
import cloudhost.core.redis as redis_module
from cloudhost.core.redis import get_redis
from cloudhost.models.host import Host

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ── Mock Redis ────────────────────────────────────────────────────────
class FakeRedis:
    """内存级 Redis 模拟，支持基本 get/set/delete 操作。"""
    def __init__(self):
        self._store: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None, **kwargs) -> None:
        self._store[key] = value

    async def setex(self, key: str, time: int, value: str) -> None:
        self._store[key] = value

    async def delete(self, *keys: str) -> None:
        for k in keys:
            self._store.pop(k, None)

    async def exists(self, key: str) -> int:
        return 1 if key in self._store else 0

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


# ── Fixtures ──────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine():
    """每个测试一个独立的内存数据库；StaticPool 让所有会话共享同一连接。"""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """提供一个干净的数据库会话。"""
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, fake_redis: FakeRedis) -> AsyncGenerator[AsyncClient, None]:
    """提供配置好依赖覆盖的异步 HTTP 测试客户端。"""
    from cloudhost.main import app

    async def override_get_db():
        yield db_session

    async def override_get_redis():
        return fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis

    original_redis_client = redis_module.redis_client
    redis_module.redis_client = fake_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    redis_module.redis_client = original_redis_client


@pytest.fixture
def auth_headers() -> dict:
    """操作员 admin 的认证头。"""
    return {"Authorization": f"Bearer {create_access_token('admin')}"}


def make_host(ip: str, **overrides) -> Host:
    """构造一台主机，未给出的字段取固定默认值。"""
    fields = dict(
        ip=ip,
        vendor="阿里云",
        region="南京",
        cpu_cores=4,
        memory_gb=8,
        disk_gb=200,
        bandwidth_mbps=10,
        os_name="CentOS 7",
        online_date=date(2024, 3, 1),
        owner="负责人1",
        department="研发部",
        shared_department=None,
        enable_status=1,
        management_status=1,
        device_status=1,
    )
    fields.update(overrides)
    return Host(**fields)


@pytest_asyncio.fixture
async def add_hosts(db_session: AsyncSession):
    """向数据库写入主机，返回它们的 IP 列表。"""
    async def _add(*hosts: Host) -> list[str]:
        db_session.add_all(hosts)
        await db_session.commit()
        return [h.ip for h in hosts]
    return _add
