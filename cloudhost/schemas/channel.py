"""
通道指标相关请求/响应模型

任务数必须等于成功、失败、空任务、消重四项之和，上报时即校验。
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from cloudhost.models.enums import TaskType
from cloudhost.schemas.common import IpStr, JoinedRecord


class TaskCounts(BaseModel):
    """任务结果计数。"""
    task_count: int = Field(..., ge=0)
    success_count: int = Field(..., ge=0)
    failure_count: int = Field(..., ge=0)
    empty_count: int = Field(..., ge=0)
    dedup_count: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _counts_balance(self):
        parts = self.success_count + self.failure_count + self.empty_count + self.dedup_count
        if self.task_count != parts:
            raise ValueError(
                f"task_count ({self.task_count}) must equal success + failure + empty + dedup ({parts})"
            )
        return self


class ChannelDetailCreate(TaskCounts):
    """通道明细上报条目；未给出采样时间时沿用所属汇总的采样时间。"""
    business_name: str = Field(..., min_length=1, max_length=50)
    ip: IpStr
    sample_time: Optional[date] = None


class ChannelSummaryCreate(TaskCounts):
    """通道汇总上报请求体，可附带明细。"""
    id: str = Field(..., min_length=1, max_length=64)
    channel_name: str = Field(..., min_length=1, max_length=50)
    task_type: TaskType
    sample_time: date
    details: List[ChannelDetailCreate] = Field(default_factory=list)


class ChannelDetailBatch(BaseModel):
    items: List[ChannelDetailCreate] = Field(..., min_length=1, max_length=1000)


class ChannelSummaryResponse(BaseModel):
    id: str
    channel_name: str
    task_type: str
    sample_time: date
    task_count: int
    success_count: int
    failure_count: int
    empty_count: int
    dedup_count: int

    model_config = {"from_attributes": True}


class ChannelDetailResponse(JoinedRecord):
    id: int
    parent_id: str
    business_name: str
    ip: str
    sample_time: date
    task_count: int
    success_count: int
    failure_count: int
    empty_count: int
    dedup_count: int

    model_config = {"from_attributes": True}


class ChannelSummaryWithDetails(ChannelSummaryResponse):
    details: List[ChannelDetailResponse] = []
