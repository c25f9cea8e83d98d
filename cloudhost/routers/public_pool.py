"""
公共池路由模块 (Public Pool Router)

功能说明：查询可申请（管理状态=3）的主机，并处理申请。
API端点：GET /public-pool, POST /public-pool/{ip}/apply
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.core.redis import get_redis
from cloudhost.schemas.common import Page
from cloudhost.schemas.host import HostResponse, PoolApplyRequest
from cloudhost.services.hosts import HostService, PublicPoolQuery
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/public-pool", tags=["public-pool"])


@router.get("", response_model=Page[HostResponse])
async def list_pool_hosts(
    params: ListParams = Depends(get_list_params),
    region: str | None = None,
    vendor: str | None = None,
    os_name: str | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """公共池列表：search 匹配 IP、操作系统、区域；已删除主机始终不可见。"""
    return await PublicPoolQuery(db).list(params, region=region, vendor=vendor, os_name=os_name)


@router.post("/{ip}/apply", response_model=HostResponse)
async def apply_pool_host(
    ip: str,
    data: PoolApplyRequest,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """
    从公共池申请主机 (Apply host from the public pool)

    Raises:
        NotFoundError 404: IP 不存在
        ConflictError 409: 主机不在公共池或已删除，主机保持不变
    """
    return await HostService(db, redis).apply_from_pool(ip, data, operator)
