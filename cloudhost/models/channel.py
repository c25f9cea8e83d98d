"""
通道维度指标模型 (Channel Metric Models)

通道汇总记录一个采集通道在某类任务上的结果统计；通道明细按业务名和主机拆分同一汇总。
两张表都满足：任务数 = 成功 + 失败 + 空任务 + 消重，由 CHECK 约束保证。
明细必须挂在已存在的汇总下，删除汇总时级联删除其明细。

A channel summary counts task outcomes for one collection channel and task type; channel
details split the same summary by business name and host. Both tables satisfy
task_count = success + failure + empty + dedup, enforced by a CHECK constraint.
A detail must belong to an existing summary; deleting a summary cascades to its details.
"""
from datetime import date

from sqlalchemy import String, Integer, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cloudhost.core.database import Base

COUNTS_BALANCED = "task_count = success_count + failure_count + empty_count + dedup_count"


class ChannelSummary(Base):
    """通道维度指标汇总表 (Channel Summary Table)"""
    __tablename__ = "channel_summaries"
    __table_args__ = (
        CheckConstraint(COUNTS_BALANCED, name="ck_channel_summaries_counts"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)  # 插入序号 (Insertion order)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)  # 汇总 ID (Summary ID)
    channel_name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)  # 通道名
    task_type: Mapped[str] = mapped_column(String(10), nullable=False)  # LIST/DATA/DETAIL
    sample_time: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    task_count: Mapped[int] = mapped_column(Integer, nullable=False)
    success_count: Mapped[int] = mapped_column(Integer, nullable=False)
    failure_count: Mapped[int] = mapped_column(Integer, nullable=False)
    empty_count: Mapped[int] = mapped_column(Integer, nullable=False)
    dedup_count: Mapped[int] = mapped_column(Integer, nullable=False)


class ChannelDetail(Base):
    """通道维度指标详细表 (Channel Detail Table)"""
    __tablename__ = "channel_details"
    __table_args__ = (
        CheckConstraint(COUNTS_BALANCED, name="ck_channel_details_counts"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    parent_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("channel_summaries.id", ondelete="CASCADE"), nullable=False, index=True
    )  # 所属汇总 ID (Parent summary ID)
    business_name: Mapped[str] = mapped_column(String(50), nullable=False)  # 业务名
    ip: Mapped[str] = mapped_column(String(45), nullable=False, index=True)
    sample_time: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    task_count: Mapped[int] = mapped_column(Integer, nullable=False)
    success_count: Mapped[int] = mapped_column(Integer, nullable=False)
    failure_count: Mapped[int] = mapped_column(Integer, nullable=False)
    empty_count: Mapped[int] = mapped_column(Integer, nullable=False)
    dedup_count: Mapped[int] = mapped_column(Integer, nullable=False)
