"""按键互斥测试：同键串行、异键并行、锁回收，以及并发公共池申请只有一个成功。"""
import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from conftest import make_host
from cloudhost.core.database import Base
from cloudhost.core.exceptions import ConflictError
from cloudhost.core.locks import KeyedLock
from cloudhost.schemas.host import PoolApplyRequest
from cloudhost.services.hosts import HostService


class TestKeyedLock:
    async def test_same_key_is_serialized(self):
        locks = KeyedLock()
        events = []

        async def worker(name):
            async with locks.hold("10.0.0.1"):
                events.append(f"{name}-in")
                await asyncio.sleep(0.01)
                events.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))
        assert events in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])

    async def test_different_keys_overlap(self):
        locks = KeyedLock()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def first():
            async with locks.hold("10.0.0.1"):
                inside.set()
                await release.wait()

        task = asyncio.create_task(first())
        await inside.wait()
        async with locks.hold("10.0.0.2"):
            assert len(locks) == 2
        release.set()
        await task

    async def test_locks_are_dropped_when_unused(self):
        locks = KeyedLock()
        async with locks.hold("10.0.0.1"):
            assert len(locks) == 1
        assert len(locks) == 0

    async def test_lock_released_on_error(self):
        locks = KeyedLock()
        with pytest.raises(RuntimeError):
            async with locks.hold("10.0.0.1"):
                raise RuntimeError("boom")
        assert len(locks) == 0


@pytest.fixture
async def file_engine(tmp_path):
    """文件数据库，两个会话各用独立连接。"""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


async def test_concurrent_apply_only_one_wins(file_engine):
    factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as setup:
        setup.add(make_host("10.6.0.1", management_status=3))
        await setup.commit()

    locks = KeyedLock()

    async def apply(owner):
        async with factory() as session:
            service = HostService(session, locks=locks)
            request = PoolApplyRequest(owner=owner, department="研发部", purpose="联调")
            try:
                host = await service.apply_from_pool("10.6.0.1", request, owner)
                return host.owner
            except ConflictError:
                return None

    results = await asyncio.gather(apply("甲"), apply("乙"))
    winners = [r for r in results if r is not None]
    assert len(winners) == 1

    async with factory() as check:
        host = await HostService(check).get("10.6.0.1")
        assert host.owner == winners[0]
        assert host.management_status == 1
