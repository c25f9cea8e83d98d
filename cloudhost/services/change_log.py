"""
主机状态变更记录服务 (Host Status Change Log Service)

功能描述 (Description):
    管理状态和设备状态的每次变更都追加一条变更记录，记录操作人、原始值、新值和备注。
    变更记录只追加不修改，与主机变更在同一事务中提交，主机写入失败时一并回滚。

    Every management-status or device-status change appends a change record with the
    operator, old value, new value and remark. Records are append-only and commit in the
    same transaction as the host write, so a failed write rolls them back too.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.models.change_record import HostChangeRecord
from cloudhost.models.enums import ChangeOperation
from cloudhost.models.host import Host
from cloudhost.schemas.change_record import HostChangeRecordResponse
from cloudhost.services.query import RecordQuery

DEFAULT_REMARKS = {
    ChangeOperation.MANAGEMENT_STATUS: "管理状态变更",
    ChangeOperation.DEVICE_STATUS: "设备状态变更",
}

# 主机状态字段 → 变更类型 (Host status field → change operation)
STATUS_FIELDS = {
    "management_status": ChangeOperation.MANAGEMENT_STATUS,
    "device_status": ChangeOperation.DEVICE_STATUS,
}


async def record_status_change(
    db: AsyncSession,
    ip: str,
    operation: ChangeOperation,
    operator: str,
    old_value: int,
    new_value: int,
    remark: Optional[str] = None,
) -> HostChangeRecord:
    """
    追加一条状态变更记录 (Append one status change record)

    使用 flush() 而非 commit()，由调用方统一提交主事务。

    Args:
        db: 异步数据库会话
        ip: 云主机 IP
        operation: 变更类型（管理状态 / 设备状态）
        operator: 操作人
        old_value: 变更前状态码
        new_value: 变更后状态码
        remark: 备注，缺省为变更类型的默认描述
    """
    entry = HostChangeRecord(
        ip=ip,
        sample_time=datetime.now(timezone.utc).date(),
        operation_type=int(operation),
        operator=operator,
        old_value=str(int(old_value)),
        new_value=str(int(new_value)),
        remark=remark or DEFAULT_REMARKS[operation],
    )
    db.add(entry)
    await db.flush()
    return entry


class ChangeRecordQuery(RecordQuery):
    """变更记录查询：按采样时间倒序，同日按变更序号倒序。"""
    model = HostChangeRecord
    schema = HostChangeRecordResponse
    key_column = HostChangeRecord.id
    search_columns = (HostChangeRecord.operator, HostChangeRecord.remark)
    time_column = HostChangeRecord.sample_time
    filter_columns = {
        "ip": HostChangeRecord.ip,
        "operation_type": HostChangeRecord.operation_type,
    }
    sort_columns = {
        "sample_time": HostChangeRecord.sample_time,
        "ip": HostChangeRecord.ip,
        "operator": HostChangeRecord.operator,
        "region": Host.region,
    }

    def natural_order(self):
        return [HostChangeRecord.sample_time.desc(), HostChangeRecord.id.desc()]
