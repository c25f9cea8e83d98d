"""
指标相关请求/响应模型

定义主机维度指标和低效主机采样的上报与查询数据结构。百分比取值范围 0-100。
"""
from datetime import date
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from cloudhost.schemas.common import IpStr, JoinedRecord

Percent = Annotated[float, Field(ge=0, le=100)]
Rate = Annotated[float, Field(ge=0)]


class HostMetricCreate(BaseModel):
    """主机维度指标上报条目。"""
    ip: IpStr
    sample_time: date
    cpu_percent: Percent
    memory_percent: Percent
    disk_percent: Percent
    net_in_rate: Rate
    net_out_rate: Rate
    process_count: int = Field(..., ge=0)
    task_count: int = Field(..., ge=0)
    running_processes: Optional[str] = None


class HostMetricBatch(BaseModel):
    items: List[HostMetricCreate] = Field(..., min_length=1, max_length=5000)


class HostMetricResponse(JoinedRecord):
    id: int
    ip: str
    sample_time: date
    cpu_percent: float
    memory_percent: float
    disk_percent: float
    net_in_rate: float
    net_out_rate: float
    process_count: int
    task_count: int
    running_processes: Optional[str] = None

    model_config = {"from_attributes": True}


class InefficientHostCreate(BaseModel):
    """低效主机采样上报条目：周均与月均。"""
    ip: IpStr
    sample_time: date
    cpu_percent_week: Percent
    memory_percent_week: Percent
    disk_percent_week: Percent
    net_in_rate_week: Rate
    net_out_rate_week: Rate
    cpu_percent_month: Percent
    memory_percent_month: Percent
    disk_percent_month: Percent
    net_in_rate_month: Rate
    net_out_rate_month: Rate


class InefficientHostBatch(BaseModel):
    items: List[InefficientHostCreate] = Field(..., min_length=1, max_length=5000)


class InefficientHostResponse(JoinedRecord):
    id: int
    ip: str
    sample_time: date
    cpu_percent_week: float
    memory_percent_week: float
    disk_percent_week: float
    net_in_rate_week: float
    net_out_rate_week: float
    cpu_percent_month: float
    memory_percent_month: float
    disk_percent_month: float
    net_in_rate_month: float
    net_out_rate_month: float

    model_config = {"from_attributes": True}


class IngestResult(BaseModel):
    """批量上报结果。"""
    accepted: int
