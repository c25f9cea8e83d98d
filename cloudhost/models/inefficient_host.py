"""
低效云主机模型 (Inefficient Host Model)

记录低利用率主机在采样日的周均、月均资源使用率和网络速率，用于识别可回收主机。

Weekly and monthly average utilization and network rates for underused hosts on a sample
date, used to spot hosts that can be reclaimed.
"""
from datetime import date

from sqlalchemy import String, Float, Date
from sqlalchemy.orm import Mapped, mapped_column

from cloudhost.core.database import Base


class InefficientHost(Base):
    """低效云主机表 (Inefficient Host Table)"""
    __tablename__ = "inefficient_hosts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(45), nullable=False, index=True)
    sample_time: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # 周均值 (Weekly averages)
    cpu_percent_week: Mapped[float] = mapped_column(Float, nullable=False)
    memory_percent_week: Mapped[float] = mapped_column(Float, nullable=False)
    disk_percent_week: Mapped[float] = mapped_column(Float, nullable=False)
    net_in_rate_week: Mapped[float] = mapped_column(Float, nullable=False)
    net_out_rate_week: Mapped[float] = mapped_column(Float, nullable=False)
    # 月均值 (Monthly averages)
    cpu_percent_month: Mapped[float] = mapped_column(Float, nullable=False)
    memory_percent_month: Mapped[float] = mapped_column(Float, nullable=False)
    disk_percent_month: Mapped[float] = mapped_column(Float, nullable=False)
    net_in_rate_month: Mapped[float] = mapped_column(Float, nullable=False)
    net_out_rate_month: Mapped[float] = mapped_column(Float, nullable=False)
