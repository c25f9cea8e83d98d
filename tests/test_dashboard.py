"""首页统计测试：计数、最新指标平均值、阈值计数、缓存与失效。"""
from datetime import date

import pytest
from httpx import AsyncClient

from conftest import make_host
from cloudhost.models.host_metric import HostMetric
from cloudhost.services.dashboard import STATS_CACHE_KEY, compute_stats


def sample(ip, cpu, memory=50.0, disk=50.0):
    return HostMetric(
        ip=ip, sample_time=date(2024, 5, 1), cpu_percent=cpu, memory_percent=memory, disk_percent=disk,
        net_in_rate=1.0, net_out_rate=1.0, process_count=100, task_count=1000,
    )


@pytest.fixture
async def fleet(db_session, add_hosts):
    await add_hosts(
        make_host("10.9.0.1", os_name="Windows Server 2016", management_status=3),
        make_host("10.9.0.2", os_name="CentOS 7", device_status=2),
        make_host("10.9.0.3", os_name="Ubuntu 20.04"),
        make_host("10.9.0.4", os_name="Windows Server 2019", enable_status=2),
    )
    db_session.add_all([
        sample("10.9.0.1", cpu=10.0),
        sample("10.9.0.1", cpu=95.0, disk=92.0),   # 最新一条 (latest)
        sample("10.9.0.2", cpu=20.0, memory=90.0),
        sample("10.9.0.4", cpu=99.0),              # 已删除主机，不计入
    ])
    await db_session.commit()


class TestComputeStats:
    async def test_counts(self, db_session, fleet):
        stats = await compute_stats(db_session)
        assert stats.total_hosts == 3
        assert stats.public_pool_count == 1
        assert stats.windows_count == 1
        assert stats.linux_count == 2
        assert stats.online_count == 2
        assert stats.abnormal_count.offline == 1

    async def test_latest_metric_averages(self, db_session, fleet):
        stats = await compute_stats(db_session)
        assert stats.cpu_usage == 57.5
        assert stats.memory_usage == 70.0
        assert stats.abnormal_count.high_cpu == 1
        assert stats.abnormal_count.high_memory == 1
        assert stats.abnormal_count.high_disk == 1

    async def test_empty(self, db_session):
        stats = await compute_stats(db_session)
        assert stats.total_hosts == 0
        assert stats.cpu_usage is None


class TestDashboardEndpoint:
    async def test_stats_are_cached(self, client: AsyncClient, auth_headers, fleet, fake_redis):
        resp = await client.get("/api/v1/dashboard/stats", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["total_hosts"] == 3
        assert await fake_redis.exists(STATS_CACHE_KEY)

    async def test_mutation_invalidates_cache(self, client: AsyncClient, auth_headers, fleet, fake_redis):
        await client.get("/api/v1/dashboard/stats", headers=auth_headers)
        await client.delete("/api/v1/hosts/10.9.0.3", headers=auth_headers)
        assert not await fake_redis.exists(STATS_CACHE_KEY)

        resp = await client.get("/api/v1/dashboard/stats", headers=auth_headers)
        assert resp.json()["total_hosts"] == 2

    async def test_requires_auth(self, client: AsyncClient):
        resp = await client.get("/api/v1/dashboard/stats")
        assert resp.status_code in (401, 403)
