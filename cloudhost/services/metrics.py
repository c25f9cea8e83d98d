"""
主机指标与低效主机服务 (Host Metric & Inefficiency Service)

功能描述 (Description):
    查询主机维度指标和低效主机采样，并接收采集端批量上报。两类记录都只追加，
    查询时按 IP 左连接主机表返回主机摘要。

    Queries per-host metrics and inefficiency samples and accepts batched uploads from
    collectors. Both collections are append-only; queries left-join the host table by IP.
"""
import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.models.host_metric import HostMetric
from cloudhost.models.inefficient_host import InefficientHost
from cloudhost.models.host import Host
from cloudhost.schemas.metric import (
    HostMetricCreate,
    HostMetricResponse,
    InefficientHostCreate,
    InefficientHostResponse,
)
from cloudhost.services.dashboard import invalidate_dashboard_cache
from cloudhost.services.query import RecordQuery

logger = logging.getLogger(__name__)


class HostMetricQuery(RecordQuery):
    """主机维度指标查询：IP 子串搜索，按采样日期过滤。"""
    model = HostMetric
    schema = HostMetricResponse
    key_column = HostMetric.id
    search_columns = (HostMetric.ip,)
    time_column = HostMetric.sample_time
    filter_columns = {"ip": HostMetric.ip}
    sort_columns = {
        "ip": HostMetric.ip,
        "sample_time": HostMetric.sample_time,
        "cpu_percent": HostMetric.cpu_percent,
        "memory_percent": HostMetric.memory_percent,
        "disk_percent": HostMetric.disk_percent,
        "net_in_rate": HostMetric.net_in_rate,
        "net_out_rate": HostMetric.net_out_rate,
        "process_count": HostMetric.process_count,
        "region": Host.region,
    }


class InefficientHostQuery(RecordQuery):
    """低效主机查询：IP 子串搜索，按采样日期过滤。"""
    model = InefficientHost
    schema = InefficientHostResponse
    key_column = InefficientHost.id
    search_columns = (InefficientHost.ip,)
    time_column = InefficientHost.sample_time
    filter_columns = {"ip": InefficientHost.ip}
    sort_columns = {
        "ip": InefficientHost.ip,
        "sample_time": InefficientHost.sample_time,
        "cpu_percent_week": InefficientHost.cpu_percent_week,
        "memory_percent_week": InefficientHost.memory_percent_week,
        "disk_percent_week": InefficientHost.disk_percent_week,
        "cpu_percent_month": InefficientHost.cpu_percent_month,
        "memory_percent_month": InefficientHost.memory_percent_month,
        "disk_percent_month": InefficientHost.disk_percent_month,
        "region": Host.region,
    }


async def ingest_metrics(db: AsyncSession, items: Iterable[HostMetricCreate], cache=None) -> int:
    """批量写入主机指标，返回写入条数。最新指标参与首页统计，因此写入后失效统计缓存。"""
    rows = [HostMetric(**item.model_dump()) for item in items]
    db.add_all(rows)
    await db.commit()
    await invalidate_dashboard_cache(cache)
    logger.info("Ingested %d host metrics", len(rows))
    return len(rows)


async def ingest_inefficient(db: AsyncSession, items: Iterable[InefficientHostCreate]) -> int:
    """批量写入低效主机采样，返回写入条数。"""
    rows = [InefficientHost(**item.model_dump()) for item in items]
    db.add_all(rows)
    await db.commit()
    logger.info("Ingested %d inefficiency samples", len(rows))
    return len(rows)
