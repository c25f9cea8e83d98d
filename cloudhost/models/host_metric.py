"""
主机维度指标模型 (Host Metric Model)

记录每台云主机在采样日的 CPU、内存、磁盘、网络速率、进程数和任务数。只追加，不修改。

Stores per-host CPU, memory, disk, network rate, process and task counts for a sample date.
Append-only.
"""
from datetime import date

from sqlalchemy import String, Integer, Float, Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from cloudhost.core.database import Base


class HostMetric(Base):
    """主机维度指标表 (Host Metric Table)"""
    __tablename__ = "host_metrics"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(45), nullable=False, index=True)  # 云主机 IP
    sample_time: Mapped[date] = mapped_column(Date, nullable=False, index=True)  # 采样时间
    cpu_percent: Mapped[float] = mapped_column(Float, nullable=False)  # CPU 使用率
    memory_percent: Mapped[float] = mapped_column(Float, nullable=False)  # 内存使用率
    disk_percent: Mapped[float] = mapped_column(Float, nullable=False)  # 磁盘使用率
    net_in_rate: Mapped[float] = mapped_column(Float, nullable=False)  # 网络读入速率
    net_out_rate: Mapped[float] = mapped_column(Float, nullable=False)  # 网络写入速率
    process_count: Mapped[int] = mapped_column(Integer, nullable=False)  # 进程数
    task_count: Mapped[int] = mapped_column(Integer, nullable=False)  # 任务数
    running_processes: Mapped[str | None] = mapped_column(Text, nullable=True)  # 运行进程，逗号分隔
