"""
CloudHost 云主机资产与运维后端 (CloudHost Inventory & Operations Backend)

提供云主机台账、利用率指标、公共池回收、通道任务统计和状态变更记录的查询与维护接口。

Provides query and maintenance APIs for the cloud host ledger, utilization metrics,
public pool reclamation, channel task statistics, and status change records.
"""

__version__ = "0.1.0"
