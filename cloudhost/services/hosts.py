"""
云主机服务 (Cloud Host Service)

功能描述 (Description):
    云主机台账的查询与维护。查询部分是主机列表和公共池列表；维护部分包括新增、部分更新、
    逻辑删除、状态恢复和公共池申请。

    Queries and maintains the cloud host ledger. Queries cover the host list and the public
    pool; maintenance covers add, partial update, soft-delete, status restore and pool apply.

并发与一致性 (Concurrency & Consistency):
    1. 同一 IP 的写操作在进程内由 host_locks 串行化
    2. 读取目标行时使用 SELECT ... FOR UPDATE，多进程部署下由数据库行锁串行化
    3. 所有前置校验在修改之前完成；主机变更与变更记录同一事务提交，全有或全无
    4. 提交成功后失效首页统计缓存

错误 (Errors):
    - NotFoundError: IP 对应的主机不存在
    - ConflictError: 公共池申请时主机不可申请；新 IP 分配多次冲突
    - ValidationError: 空更新、必填字段被置空
"""
import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.config import settings
from cloudhost.core.exceptions import ConflictError, NotFoundError, ValidationError
from cloudhost.core.locks import KeyedLock, host_locks
from cloudhost.models.enums import DeviceStatus, EnableStatus, ManagementStatus
from cloudhost.models.host import Host
from cloudhost.schemas.host import HostCreate, HostResponse, HostUpdate, PoolApplyRequest
from cloudhost.services.change_log import STATUS_FIELDS, record_status_change
from cloudhost.services.dashboard import invalidate_dashboard_cache
from cloudhost.services.query import ListParams, RecordQuery, _plain

logger = logging.getLogger(__name__)

# 更新时允许置空的字段 (Fields that may be cleared on update)
NULLABLE_FIELDS = {"shared_department"}


def _random_ip() -> str:
    """生成 10.x.x.x 形式的内网 IP (Generate a 10.x.x.x private address)."""
    return "10.{}.{}.{}".format(random.randint(0, 255), random.randint(0, 255), random.randint(1, 254))


class HostQuery(RecordQuery):
    """主机列表查询：新增的主机排在最前。"""
    model = Host
    schema = HostResponse
    key_column = Host.id
    join_host = False
    search_columns = (Host.ip, Host.owner, Host.department, Host.os_name)
    time_column = Host.online_date
    filter_columns = {
        "ip": Host.ip,
        "vendor": Host.vendor,
        "region": Host.region,
        "os_name": Host.os_name,
        "owner": Host.owner,
        "department": Host.department,
        "enable_status": Host.enable_status,
        "management_status": Host.management_status,
        "device_status": Host.device_status,
    }
    sort_columns = {
        "ip": Host.ip,
        "vendor": Host.vendor,
        "region": Host.region,
        "cpu_cores": Host.cpu_cores,
        "memory_gb": Host.memory_gb,
        "disk_gb": Host.disk_gb,
        "bandwidth_mbps": Host.bandwidth_mbps,
        "online_date": Host.online_date,
        "owner": Host.owner,
    }

    def natural_order(self):
        return [Host.id.desc()]

    def scope_conditions(self, params, criteria):
        # 显式按 enable_status 过滤时以该条件为准 (An explicit enable_status filter wins)
        if params.include_deleted or criteria.get("enable_status") is not None:
            return []
        return [Host.enable_status != int(EnableStatus.DELETED)]


class PublicPoolQuery(HostQuery):
    """公共池查询：仅可申请（管理状态=3）且未删除的主机。"""
    search_columns = (Host.ip, Host.os_name, Host.region)
    filter_columns = {
        "region": Host.region,
        "vendor": Host.vendor,
        "os_name": Host.os_name,
    }

    def scope_conditions(self, params, criteria):
        return [
            Host.management_status == int(ManagementStatus.POOLABLE),
            Host.enable_status != int(EnableStatus.DELETED),
        ]


class HostService:
    """云主机维护服务 (Cloud host maintenance service)"""

    def __init__(self, db: AsyncSession, cache=None, locks: KeyedLock = host_locks):
        self.db = db
        self.cache = cache
        self.locks = locks

    async def get(self, ip: str) -> Host:
        host = (await self.db.execute(select(Host).where(Host.ip == ip))).scalar_one_or_none()
        if host is None:
            raise NotFoundError(f"云主机不存在 (Host not found): {ip}")
        return host

    @asynccontextmanager
    async def _locked(self, ip: str) -> AsyncIterator[None]:
        """持有该 IP 的写锁；块内出错时回滚，主机与变更记录全部不落库。"""
        async with self.locks.hold(ip):
            try:
                yield
            except Exception:
                await self.db.rollback()
                raise

    async def _get_for_update(self, ip: str) -> Host:
        """持锁后重新读取目标行并加行锁，确保看到最新已提交状态。"""
        stmt = (
            select(Host)
            .where(Host.ip == ip)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        host = (await self.db.execute(stmt)).scalar_one_or_none()
        if host is None:
            raise NotFoundError(f"云主机不存在 (Host not found): {ip}")
        return host

    async def _commit(self, host: Host) -> Host:
        await self.db.commit()
        await self.db.refresh(host)
        await invalidate_dashboard_cache(self.cache)
        return host

    async def _set_status(self, host: Host, field: str, value: int, operator: str,
                          remark: Optional[str] = None) -> None:
        """修改状态字段；值确有变化时追加变更记录。"""
        old = getattr(host, field)
        if old == value:
            return
        setattr(host, field, value)
        operation = STATUS_FIELDS.get(field)
        if operation is not None:
            await record_status_change(self.db, host.ip, operation, operator, old, value, remark)

    async def add(self, data: HostCreate, operator: str) -> Host:
        """
        新增云主机 (Add host)

        IP 由服务端随机分配；与现有主机冲突时重试，超过 ip_allocation_attempts 次报 Conflict。
        非幂等：每次调用都会产生一台新主机。
        """
        fields = {k: _plain(v) for k, v in data.model_dump().items()}
        for attempt in range(settings.ip_allocation_attempts):
            ip = _random_ip()
            taken = (await self.db.execute(select(Host.id).where(Host.ip == ip))).first()
            if taken:
                continue
            host = Host(ip=ip, **fields)
            self.db.add(host)
            try:
                await self.db.commit()
            except IntegrityError:
                # 并发新增抢占了同一 IP (A concurrent add took the same IP)
                await self.db.rollback()
                continue
            await self.db.refresh(host)
            await invalidate_dashboard_cache(self.cache)
            logger.info("Host %s added by %s (attempt %d)", ip, operator, attempt + 1)
            return host
        raise ConflictError(
            "无法分配空闲 IP (Could not allocate a free IP)",
            detail=f"attempts={settings.ip_allocation_attempts}",
        )

    async def update(self, ip: str, patch: HostUpdate, operator: str) -> Host:
        """
        部分更新云主机 (Partially update host)

        只更新请求中显式给出的字段；管理状态、设备状态变化时追加变更记录。幂等。
        """
        changes = {k: _plain(v) for k, v in patch.model_dump(exclude_unset=True).items()}
        if not changes:
            raise ValidationError("没有需要更新的字段 (No fields to update)")
        cleared = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_FIELDS)
        if cleared:
            raise ValidationError("必填字段不能为空 (Required fields cannot be null)", detail=", ".join(cleared))

        async with self._locked(ip):
            host = await self._get_for_update(ip)
            for field, value in changes.items():
                if field in STATUS_FIELDS:
                    await self._set_status(host, field, value, operator)
                else:
                    setattr(host, field, value)
            host = await self._commit(host)
        logger.info("Host %s updated by %s: %s", ip, operator, ", ".join(sorted(changes)))
        return host

    async def delete(self, ip: str, operator: str) -> Host:
        """逻辑删除：enable_status 置为 2，不物理删除。已删除的主机重复删除视为成功。"""
        async with self._locked(ip):
            host = await self._get_for_update(ip)
            if host.enable_status == int(EnableStatus.DELETED):
                await self.db.commit()
                return host
            host.enable_status = int(EnableStatus.DELETED)
            host = await self._commit(host)
        logger.info("Host %s soft-deleted by %s", ip, operator)
        return host

    async def restore_status(self, ip: str, operator: str) -> Host:
        """恢复主机状态：管理状态和设备状态重置为正常，其余字段不变。幂等。"""
        async with self._locked(ip):
            host = await self._get_for_update(ip)
            await self._set_status(host, "management_status", int(ManagementStatus.NORMAL), operator)
            await self._set_status(host, "device_status", int(DeviceStatus.NORMAL), operator)
            host = await self._commit(host)
        logger.info("Host %s status restored by %s", ip, operator)
        return host

    async def apply_from_pool(self, ip: str, request: PoolApplyRequest, operator: str) -> Host:
        """
        从公共池申请主机 (Apply host from the public pool)

        主机必须处于可申请状态且未被逻辑删除，否则报 Conflict 且主机不变。
        申请成功后管理状态恢复正常，负责人和使用部门改为申请人信息；用途写入变更记录备注。
        """
        async with self._locked(ip):
            host = await self._get_for_update(ip)
            if host.enable_status == int(EnableStatus.DELETED):
                raise ConflictError(f"主机已删除，不可申请 (Host is deleted): {ip}")
            if host.management_status != int(ManagementStatus.POOLABLE):
                raise ConflictError(
                    f"主机不在公共池中 (Host is not in the public pool): {ip}",
                    detail=f"management_status={host.management_status}",
                )
            await self._set_status(
                host, "management_status", int(ManagementStatus.NORMAL), operator,
                remark=f"公共池申请: {request.purpose}",
            )
            host.owner = request.owner
            host.department = request.department
            host = await self._commit(host)
        logger.info("Host %s applied from pool by %s for %s", ip, operator, request.owner)
        return host
