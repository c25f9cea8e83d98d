"""
首页统计服务 (Dashboard Statistics Service)

功能描述 (Description):
    汇总未逻辑删除主机的数量、公共池数量、操作系统分布、在线数，以及每台主机最新一次指标的
    平均使用率和超阈值主机数。结果缓存在 Redis 中，任一主机变更后失效。

    Aggregates active-host counts, pool size, OS split and online count, plus the average
    utilisation and over-threshold counts of each host's latest metric. The result is cached
    in Redis and invalidated after any host mutation.

缓存失败不影响统计本身：Redis 不可用时直接查库并记录警告。
"""
import json
import logging

from redis.exceptions import RedisError
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.config import settings
from cloudhost.models.enums import DeviceStatus, EnableStatus, ManagementStatus
from cloudhost.models.host import Host
from cloudhost.models.host_metric import HostMetric
from cloudhost.schemas.dashboard import AbnormalCounts, DashboardStats

logger = logging.getLogger(__name__)

STATS_CACHE_KEY = "dashboard:stats"


def _count_if(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


async def compute_stats(db: AsyncSession) -> DashboardStats:
    """直接查库计算首页统计 (Compute dashboard statistics from the database)."""
    active = Host.enable_status != int(EnableStatus.DELETED)

    host_row = (await db.execute(
        select(
            func.count(Host.id),
            _count_if(Host.management_status == int(ManagementStatus.POOLABLE)),
            _count_if(Host.os_name.ilike("%windows%")),
            _count_if(Host.device_status == int(DeviceStatus.NORMAL)),
        ).where(active)
    )).one()
    total, pool, windows, online = (int(v or 0) for v in host_row)

    # 每台主机最新一次指标：同一 IP 下 id 最大的记录 (Latest metric per host: highest id per IP)
    latest_ids = (
        select(func.max(HostMetric.id).label("id"))
        .group_by(HostMetric.ip)
        .subquery()
    )
    metric_row = (await db.execute(
        select(
            func.avg(HostMetric.cpu_percent),
            func.avg(HostMetric.memory_percent),
            func.avg(HostMetric.disk_percent),
            _count_if(HostMetric.cpu_percent > settings.high_cpu_threshold),
            _count_if(HostMetric.memory_percent > settings.high_memory_threshold),
            _count_if(HostMetric.disk_percent > settings.high_disk_threshold),
        )
        .select_from(HostMetric)
        .join(latest_ids, latest_ids.c.id == HostMetric.id)
        .join(Host, Host.ip == HostMetric.ip)
        .where(active)
    )).one()
    cpu, memory, disk, high_cpu, high_memory, high_disk = metric_row

    return DashboardStats(
        total_hosts=total,
        public_pool_count=pool,
        windows_count=windows,
        linux_count=total - windows,
        online_count=online,
        cpu_usage=round(float(cpu), 2) if cpu is not None else None,
        memory_usage=round(float(memory), 2) if memory is not None else None,
        disk_usage=round(float(disk), 2) if disk is not None else None,
        abnormal_count=AbnormalCounts(
            high_cpu=int(high_cpu or 0),
            high_memory=int(high_memory or 0),
            high_disk=int(high_disk or 0),
            offline=total - online,
        ),
    )


async def get_dashboard_stats(db: AsyncSession, cache=None) -> DashboardStats:
    """
    获取首页统计，优先读缓存 (Get dashboard statistics, cache first)

    Args:
        db: 异步数据库会话
        cache: Redis 客户端；为 None 时不使用缓存
    """
    if cache is not None:
        try:
            cached = await cache.get(STATS_CACHE_KEY)
            if cached:
                return DashboardStats.model_validate(json.loads(cached))
        except RedisError as e:
            logger.warning("Dashboard cache read failed: %s", e)

    stats = await compute_stats(db)

    if cache is not None:
        try:
            await cache.setex(STATS_CACHE_KEY, settings.dashboard_cache_ttl, stats.model_dump_json())
        except RedisError as e:
            logger.warning("Dashboard cache write failed: %s", e)
    return stats


async def invalidate_dashboard_cache(cache) -> None:
    """主机变更提交后调用，删除统计缓存 (Drop cached statistics after a host mutation commits)."""
    if cache is None:
        return
    try:
        await cache.delete(STATS_CACHE_KEY)
    except RedisError as e:
        logger.warning("Dashboard cache invalidation failed: %s", e)
