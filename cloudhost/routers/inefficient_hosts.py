"""
低效主机路由模块 (Inefficient Host Router)

API端点：GET /inefficient-hosts（查询）, POST /inefficient-hosts（批量上报周/月均采样）
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.schemas.common import Page
from cloudhost.schemas.metric import IngestResult, InefficientHostBatch, InefficientHostResponse
from cloudhost.services.metrics import InefficientHostQuery, ingest_inefficient
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/inefficient-hosts", tags=["inefficient-hosts"])


@router.get("", response_model=Page[InefficientHostResponse])
async def list_inefficient_hosts(
    params: ListParams = Depends(get_list_params),
    ip: str | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    return await InefficientHostQuery(db).list(params, ip=ip)


@router.post("", response_model=IngestResult, status_code=status.HTTP_201_CREATED)
async def upload_inefficient_hosts(
    batch: InefficientHostBatch,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    return IngestResult(accepted=await ingest_inefficient(db, batch.items))
