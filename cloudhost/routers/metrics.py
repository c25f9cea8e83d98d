"""
主机指标路由模块 (Host Metric Router)

API端点：GET /metrics（查询）, POST /metrics（采集端批量上报）
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.core.redis import get_redis
from cloudhost.schemas.common import Page
from cloudhost.schemas.metric import HostMetricBatch, HostMetricResponse, IngestResult
from cloudhost.services.metrics import HostMetricQuery, ingest_metrics
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("", response_model=Page[HostMetricResponse])
async def list_metrics(
    params: ListParams = Depends(get_list_params),
    ip: str | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """主机维度指标列表，每条附带主机摘要 host。"""
    return await HostMetricQuery(db).list(params, ip=ip)


@router.post("", response_model=IngestResult, status_code=status.HTTP_201_CREATED)
async def upload_metrics(
    batch: HostMetricBatch,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    return IngestResult(accepted=await ingest_metrics(db, batch.items, redis))
