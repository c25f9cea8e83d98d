"""
通用请求/响应模型

定义统一分页响应体 Page[T]、IP 地址字段类型和联表返回的主机摘要。
"""
import ipaddress
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel

T = TypeVar("T")


def _check_ip(value: str) -> str:
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        raise ValueError(f"invalid IP address: {value!r}")


IpStr = Annotated[str, AfterValidator(_check_ip)]


class Page(BaseModel, Generic[T]):
    """分页响应体：list 为当前页记录，total 为过滤后、分页前的总数。"""
    list: List[T]
    total: int
    page: int
    page_size: int


class HostBrief(BaseModel):
    """联表返回的主机摘要，按 IP 关联；无对应主机时为 null。"""
    ip: str
    vendor: str
    region: str
    os_name: str
    owner: str
    department: str
    enable_status: int
    management_status: int
    device_status: int

    model_config = {"from_attributes": True}


class JoinedRecord(BaseModel):
    """带主机摘要的记录基类。"""
    host: Optional[HostBrief] = None
