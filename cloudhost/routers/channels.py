"""
通道指标路由模块 (Channel Metric Router)

功能说明：通道汇总与通道明细的查询、上报和删除
核心职责：
  - 分页查询通道汇总（通道名、任务类型过滤）
  - 分页查询通道明细（全部明细，或某个汇总下的明细）
  - 上报汇总（可附带明细）、向已有汇总追加明细、删除汇总及其明细
API端点：GET/POST /channels, GET /channels/details, DELETE /channels/{id},
        GET/POST /channels/{id}/details
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.models.enums import TaskType
from cloudhost.schemas.channel import (
    ChannelDetailBatch,
    ChannelDetailResponse,
    ChannelSummaryCreate,
    ChannelSummaryResponse,
    ChannelSummaryWithDetails,
)
from cloudhost.schemas.common import Page
from cloudhost.schemas.metric import IngestResult
from cloudhost.services.channels import ChannelDetailQuery, ChannelService, ChannelSummaryQuery
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/channels", tags=["channels"])


@router.get("", response_model=Page[ChannelSummaryResponse])
async def list_channel_summaries(
    params: ListParams = Depends(get_list_params),
    channel_name: str | None = None,
    task_type: TaskType | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """通道汇总列表：channel_name、task_type 为等值过滤，search 匹配汇总 ID 和通道名。"""
    return await ChannelSummaryQuery(db).list(params, channel_name=channel_name, task_type=task_type)


@router.post("", response_model=ChannelSummaryWithDetails, status_code=status.HTTP_201_CREATED)
async def create_channel_summary(
    data: ChannelSummaryCreate,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """
    上报通道汇总 (Ingest channel summary)

    Raises:
        ConflictError 409: 汇总 ID 已存在
    """
    summary, details = await ChannelService(db).create_summary(data)
    result = ChannelSummaryWithDetails.model_validate(summary)
    result.details = [ChannelDetailResponse.model_validate(d) for d in details]
    return result


# 必须在 /{summary_id} 之前声明 (Must be declared before /{summary_id})
@router.get("/details", response_model=Page[ChannelDetailResponse])
async def list_channel_details(
    params: ListParams = Depends(get_list_params),
    parent_id: str | None = None,
    business_name: str | None = None,
    ip: str | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    return await ChannelDetailQuery(db).list(params, parent_id=parent_id, business_name=business_name, ip=ip)


@router.delete("/{summary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_channel_summary(
    summary_id: str,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """删除汇总并级联删除其明细。"""
    await ChannelService(db).delete_summary(summary_id)


@router.get("/{summary_id}/details", response_model=Page[ChannelDetailResponse])
async def list_summary_details(
    summary_id: str,
    params: ListParams = Depends(get_list_params),
    business_name: str | None = None,
    ip: str | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """某个汇总下的明细；汇总不存在时返回 404 而不是空列表。"""
    await ChannelService(db).require_summary(summary_id)
    return await ChannelDetailQuery(db).list(params, parent_id=summary_id, business_name=business_name, ip=ip)


@router.post("/{summary_id}/details", response_model=IngestResult, status_code=status.HTTP_201_CREATED)
async def add_channel_details(
    summary_id: str,
    batch: ChannelDetailBatch,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    details = await ChannelService(db).add_details(summary_id, batch.items)
    return IngestResult(accepted=len(details))
