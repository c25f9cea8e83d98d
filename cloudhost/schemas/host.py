"""
云主机相关请求/响应模型

定义主机新增、部分更新、公共池申请和主机详情的数据结构。
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from cloudhost.models.enums import DeviceStatus, EnableStatus, ManagementStatus


class HostCreate(BaseModel):
    """新增云主机请求体，IP 由服务端分配。"""
    vendor: str = Field(..., min_length=1, max_length=50, description="云主机厂商")
    region: str = Field(..., min_length=1, max_length=50, description="区域")
    cpu_cores: int = Field(..., gt=0, description="处理器核数")
    memory_gb: int = Field(..., gt=0, description="内存 GB")
    disk_gb: int = Field(..., gt=0, description="磁盘 GB")
    bandwidth_mbps: int = Field(..., gt=0, description="带宽 Mbps")
    os_name: str = Field(..., min_length=1, max_length=100, description="操作系统")
    online_date: date = Field(..., description="上线时间")
    owner: str = Field(..., min_length=1, max_length=100, description="负责人")
    department: str = Field(..., min_length=1, max_length=100, description="使用部门")
    shared_department: Optional[str] = Field(None, max_length=100, description="共享部门")
    enable_status: EnableStatus = EnableStatus.ACTIVE
    management_status: ManagementStatus = ManagementStatus.NORMAL
    device_status: DeviceStatus = DeviceStatus.NORMAL


class HostUpdate(BaseModel):
    """部分更新云主机请求体，只更新显式传入的字段；IP 不可修改。"""
    vendor: Optional[str] = Field(None, min_length=1, max_length=50)
    region: Optional[str] = Field(None, min_length=1, max_length=50)
    cpu_cores: Optional[int] = Field(None, gt=0)
    memory_gb: Optional[int] = Field(None, gt=0)
    disk_gb: Optional[int] = Field(None, gt=0)
    bandwidth_mbps: Optional[int] = Field(None, gt=0)
    os_name: Optional[str] = Field(None, min_length=1, max_length=100)
    online_date: Optional[date] = None
    owner: Optional[str] = Field(None, min_length=1, max_length=100)
    department: Optional[str] = Field(None, min_length=1, max_length=100)
    shared_department: Optional[str] = Field(None, max_length=100)
    enable_status: Optional[EnableStatus] = None
    management_status: Optional[ManagementStatus] = None
    device_status: Optional[DeviceStatus] = None

    model_config = {"extra": "forbid"}


class PoolApplyRequest(BaseModel):
    """公共池申请请求体。"""
    owner: str = Field(..., min_length=1, max_length=100, description="负责人")
    department: str = Field(..., min_length=1, max_length=100, description="使用部门")
    purpose: str = Field(..., min_length=1, max_length=500, description="用途")


class HostResponse(BaseModel):
    """云主机响应体。"""
    id: int
    ip: str
    vendor: str
    region: str
    cpu_cores: int
    memory_gb: int
    disk_gb: int
    bandwidth_mbps: int
    os_name: str
    online_date: date
    owner: str
    department: str
    shared_department: Optional[str] = None
    enable_status: int
    management_status: int
    device_status: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
