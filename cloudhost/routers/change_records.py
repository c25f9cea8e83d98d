"""
主机状态变更记录路由模块 (Host Change Record Router)

变更记录由主机写操作自动追加，此处只提供查询。
API端点：GET /change-records
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.models.enums import ChangeOperation
from cloudhost.schemas.change_record import HostChangeRecordResponse
from cloudhost.schemas.common import Page
from cloudhost.services.change_log import ChangeRecordQuery
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/change-records", tags=["change-records"])


@router.get("", response_model=Page[HostChangeRecordResponse])
async def list_change_records(
    params: ListParams = Depends(get_list_params),
    ip: str | None = None,
    operation_type: ChangeOperation | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """
    变更记录列表 (Change record list)

    search 匹配操作人和备注；start_time/end_time 比较变更日期。默认按日期倒序。
    """
    return await ChangeRecordQuery(db).list(params, ip=ip, operation_type=operation_type)
