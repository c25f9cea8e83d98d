"""
云主机变更记录模型 (Host Change Record Model)

记录管理状态或设备状态的每一次变更，含操作人、原始值、新值和备注。只追加，不修改。
id 即同一 (IP, 采样日) 内的变更序号。

Records every management-status or device-status change with operator, old value, new
value and remark. Append-only. id doubles as the sequence within one (IP, sample date).
"""
from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from cloudhost.core.database import Base


class HostChangeRecord(Base):
    """云主机变更记录表 (Host Change Record Table)"""
    __tablename__ = "host_change_records"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # 变更序号 (Sequence)
    ip: Mapped[str] = mapped_column(String(45), nullable=False, index=True)
    sample_time: Mapped[date] = mapped_column(Date, nullable=False, index=True)  # 采样时间
    operation_type: Mapped[int] = mapped_column(Integer, nullable=False)  # 1 管理状态 / 2 设备状态
    operator: Mapped[str] = mapped_column(String(100), nullable=False)  # 操作人
    old_value: Mapped[str] = mapped_column(String(20), nullable=False)  # 原始值
    new_value: Mapped[str] = mapped_column(String(20), nullable=False)  # 新值
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)  # 备注
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
