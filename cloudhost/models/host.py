"""
云主机模型 (Cloud Host Model)

定义云主机台账的表结构，记录厂商、区域、硬件规格、系统、负责人和三个相互独立的状态字段。
IP 地址是主机的业务主键；删除只做逻辑删除（enable_status=2），不物理删除。

Defines the cloud host ledger table: vendor, region, hardware spec, OS, owner, and three
independent status fields. The IP address is the business key; deletion only flips
enable_status to soft-deleted, rows are never physically removed.
"""
from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from cloudhost.core.database import Base
from cloudhost.models.enums import DeviceStatus, EnableStatus, ManagementStatus


class Host(Base):
    """
    云主机表 (Cloud Host Table)

    id 为自增代理键，仅用于稳定排序；对外一律以 ip 标识主机。

    id is a surrogate key used only for stable ordering; hosts are addressed by ip externally.
    """
    __tablename__ = "hosts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # 代理键 (Surrogate Key)
    ip: Mapped[str] = mapped_column(String(45), unique=True, nullable=False, index=True)  # 云主机 IP (Host IP)
    vendor: Mapped[str] = mapped_column(String(50), nullable=False)  # 云主机厂商 (Cloud Vendor)
    region: Mapped[str] = mapped_column(String(50), nullable=False, index=True)  # 区域 (Region)
    cpu_cores: Mapped[int] = mapped_column(Integer, nullable=False)  # 处理器核数 (CPU Cores)
    memory_gb: Mapped[int] = mapped_column(Integer, nullable=False)  # 内存 GB (Memory GB)
    disk_gb: Mapped[int] = mapped_column(Integer, nullable=False)  # 磁盘 GB (Disk GB)
    bandwidth_mbps: Mapped[int] = mapped_column(Integer, nullable=False)  # 带宽 Mbps (Bandwidth Mbps)
    os_name: Mapped[str] = mapped_column(String(100), nullable=False)  # 操作系统 (Operating System)
    online_date: Mapped[date] = mapped_column(Date, nullable=False)  # 上线时间 (Online Date)
    owner: Mapped[str] = mapped_column(String(100), nullable=False, index=True)  # 负责人 (Owner)
    department: Mapped[str] = mapped_column(String(100), nullable=False)  # 使用部门 (Department)
    shared_department: Mapped[str | None] = mapped_column(String(100), nullable=True)  # 共享部门 (Shared Department)
    enable_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(EnableStatus.ACTIVE), index=True
    )  # 启用状态 (Enable Status)
    management_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(ManagementStatus.NORMAL), index=True
    )  # 管理状态 (Management Status)
    device_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(DeviceStatus.NORMAL)
    )  # 设备状态 (Device Status)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
