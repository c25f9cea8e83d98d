"""
云主机路由模块 (Cloud Host Router)

功能说明：云主机台账的查询与维护接口
核心职责：
  - 分页查询主机列表（关键词、上线日期、厂商/区域/状态等条件）
  - 新增主机（服务端分配 IP）、部分更新、逻辑删除、状态恢复
依赖关系：HostQuery / HostService，Redis 仅用于失效首页统计缓存
API端点：GET/POST /hosts, GET/PATCH/DELETE /hosts/{ip}, POST /hosts/{ip}/restore-status
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator, get_list_params
from cloudhost.core.redis import get_redis
from cloudhost.models.enums import DeviceStatus, EnableStatus, ManagementStatus
from cloudhost.schemas.common import Page
from cloudhost.schemas.host import HostCreate, HostResponse, HostUpdate
from cloudhost.services.hosts import HostQuery, HostService
from cloudhost.services.query import ListParams

router = APIRouter(prefix="/api/v1/hosts", tags=["hosts"])


@router.get("", response_model=Page[HostResponse])
async def list_hosts(
    params: ListParams = Depends(get_list_params),
    ip: str | None = None,
    vendor: str | None = None,
    region: str | None = None,
    os_name: str | None = None,
    owner: str | None = None,
    department: str | None = None,
    enable_status: EnableStatus | None = None,
    management_status: ManagementStatus | None = None,
    device_status: DeviceStatus | None = None,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    """
    主机列表查询接口 (Host List Query)

    search 匹配 IP、负责人、使用部门、操作系统；start_time/end_time 比较上线日期。
    默认不含已逻辑删除的主机，include_deleted=true 或显式传 enable_status 时包含。
    """
    return await HostQuery(db).list(
        params,
        ip=ip,
        vendor=vendor,
        region=region,
        os_name=os_name,
        owner=owner,
        department=department,
        enable_status=enable_status,
        management_status=management_status,
        device_status=device_status,
    )


@router.post("", response_model=HostResponse, status_code=status.HTTP_201_CREATED)
async def add_host(
    data: HostCreate,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """新增云主机，IP 由服务端分配。"""
    return await HostService(db, redis).add(data, operator)


@router.get("/{ip}", response_model=HostResponse)
async def get_host(
    ip: str,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
):
    return await HostService(db).get(ip)


@router.patch("/{ip}", response_model=HostResponse)
async def update_host(
    ip: str,
    patch: HostUpdate,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """
    部分更新云主机 (Partial host update)

    Raises:
        NotFoundError 404: IP 不存在
        ValidationError 422: 空更新或必填字段置空
    """
    return await HostService(db, redis).update(ip, patch, operator)


@router.delete("/{ip}", response_model=HostResponse)
async def delete_host(
    ip: str,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """逻辑删除主机：记录保留，默认查询不再可见。"""
    return await HostService(db, redis).delete(ip, operator)


@router.post("/{ip}/restore-status", response_model=HostResponse)
async def restore_host_status(
    ip: str,
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """管理状态与设备状态恢复为正常。"""
    return await HostService(db, redis).restore_status(ip, operator)
