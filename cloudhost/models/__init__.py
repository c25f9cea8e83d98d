"""
数据模型包 (Data Models Package)

集中导出所有 SQLAlchemy ORM 模型：云主机台账、主机指标、低效主机、通道汇总与明细、状态变更记录。

Centrally exports all SQLAlchemy ORM models: host ledger, host metrics, inefficient hosts,
channel summaries and details, and status change records.
"""
from cloudhost.models.host import Host
from cloudhost.models.host_metric import HostMetric
from cloudhost.models.inefficient_host import InefficientHost
from cloudhost.models.channel import ChannelSummary, ChannelDetail
from cloudhost.models.change_record import HostChangeRecord

__all__ = [
    "Host", "HostMetric", "InefficientHost",
    "ChannelSummary", "ChannelDetail", "HostChangeRecord",
]
