"""
首页统计响应模型 (Dashboard Statistics Response Models)
"""
from typing import Optional

from pydantic import BaseModel, Field


class AbnormalCounts(BaseModel):
    """异常主机计数：按最新一次指标与阈值比较。"""
    high_cpu: int = 0
    high_memory: int = 0
    high_disk: int = 0
    offline: int = 0


class DashboardStats(BaseModel):
    """首页统计数据，仅统计未逻辑删除的主机。"""
    total_hosts: int = 0
    public_pool_count: int = 0
    windows_count: int = 0
    linux_count: int = 0
    online_count: int = 0
    cpu_usage: Optional[float] = Field(None, description="最新指标平均 CPU 使用率")
    memory_usage: Optional[float] = None
    disk_usage: Optional[float] = None
    abnormal_count: AbnormalCounts = Field(default_factory=AbnormalCounts)
