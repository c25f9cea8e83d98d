"""
通道指标服务 (Channel Metric Service)

功能描述 (Description):
    通道汇总与通道明细的查询和上报。明细必须挂在已存在的汇总下；删除汇总时先删除其明细。
    任务数 = 成功 + 失败 + 空任务 + 消重，由请求模型和数据库 CHECK 约束共同保证。

    Queries and ingests channel summaries and their details. A detail must belong to an
    existing summary; deleting a summary removes its details first. The task counter
    invariant is enforced by the request models and by database CHECK constraints.
"""
import logging
from typing import Iterable, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.exceptions import ConflictError, NotFoundError
from cloudhost.models.channel import ChannelDetail, ChannelSummary
from cloudhost.models.host import Host
from cloudhost.schemas.channel import (
    ChannelDetailCreate,
    ChannelDetailResponse,
    ChannelSummaryCreate,
    ChannelSummaryResponse,
)
from cloudhost.services.query import RecordQuery

logger = logging.getLogger(__name__)


class ChannelSummaryQuery(RecordQuery):
    """通道汇总查询：按通道名、任务类型等值过滤。"""
    model = ChannelSummary
    schema = ChannelSummaryResponse
    key_column = ChannelSummary.seq
    join_host = False
    search_columns = (ChannelSummary.id, ChannelSummary.channel_name)
    time_column = ChannelSummary.sample_time
    filter_columns = {
        "channel_name": ChannelSummary.channel_name,
        "task_type": ChannelSummary.task_type,
    }
    sort_columns = {
        "id": ChannelSummary.id,
        "channel_name": ChannelSummary.channel_name,
        "sample_time": ChannelSummary.sample_time,
        "task_count": ChannelSummary.task_count,
        "success_count": ChannelSummary.success_count,
        "failure_count": ChannelSummary.failure_count,
    }


class ChannelDetailQuery(RecordQuery):
    """通道明细查询：可按所属汇总、业务名、IP 过滤。"""
    model = ChannelDetail
    schema = ChannelDetailResponse
    key_column = ChannelDetail.id
    search_columns = (ChannelDetail.business_name, ChannelDetail.ip)
    time_column = ChannelDetail.sample_time
    filter_columns = {
        "parent_id": ChannelDetail.parent_id,
        "business_name": ChannelDetail.business_name,
        "ip": ChannelDetail.ip,
    }
    sort_columns = {
        "business_name": ChannelDetail.business_name,
        "ip": ChannelDetail.ip,
        "sample_time": ChannelDetail.sample_time,
        "task_count": ChannelDetail.task_count,
        "success_count": ChannelDetail.success_count,
        "failure_count": ChannelDetail.failure_count,
        "region": Host.region,
    }


class ChannelService:
    """通道指标维护服务 (Channel metric maintenance service)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def require_summary(self, summary_id: str) -> ChannelSummary:
        summary = (await self.db.execute(
            select(ChannelSummary).where(ChannelSummary.id == summary_id)
        )).scalar_one_or_none()
        if summary is None:
            raise NotFoundError(f"通道汇总不存在 (Channel summary not found): {summary_id}")
        return summary

    def _detail(self, summary: ChannelSummary, item: ChannelDetailCreate) -> ChannelDetail:
        fields = item.model_dump()
        if fields.get("sample_time") is None:
            fields["sample_time"] = summary.sample_time
        return ChannelDetail(parent_id=summary.id, **fields)

    async def create_summary(self, data: ChannelSummaryCreate) -> Tuple[ChannelSummary, List[ChannelDetail]]:
        """
        上报一条通道汇总及其明细 (Ingest one channel summary with its details)

        Raises:
            ConflictError: 汇总 ID 已存在
        """
        exists = (await self.db.execute(
            select(ChannelSummary.seq).where(ChannelSummary.id == data.id)
        )).first()
        if exists:
            raise ConflictError(f"通道汇总已存在 (Channel summary already exists): {data.id}")

        fields = data.model_dump(exclude={"details"})
        fields["task_type"] = data.task_type.value
        summary = ChannelSummary(**fields)
        details = [self._detail(summary, item) for item in data.details]
        self.db.add(summary)
        self.db.add_all(details)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"通道汇总已存在 (Channel summary already exists): {data.id}")
        logger.info("Channel summary %s ingested with %d details", summary.id, len(details))
        return summary, details

    async def add_details(self, summary_id: str, items: Iterable[ChannelDetailCreate]) -> List[ChannelDetail]:
        """向已存在的汇总追加明细；汇总不存在时报 NotFound。"""
        summary = await self.require_summary(summary_id)
        details = [self._detail(summary, item) for item in items]
        self.db.add_all(details)
        await self.db.commit()
        logger.info("Appended %d details to channel summary %s", len(details), summary_id)
        return details

    async def delete_summary(self, summary_id: str) -> int:
        """删除汇总及其全部明细，返回删除的明细条数。"""
        summary = await self.require_summary(summary_id)
        result = await self.db.execute(delete(ChannelDetail).where(ChannelDetail.parent_id == summary_id))
        await self.db.delete(summary)
        await self.db.commit()
        logger.info("Channel summary %s deleted with %d details", summary_id, result.rowcount)
        return result.rowcount
