"""
云主机变更记录响应模型
"""
from datetime import date
from typing import Optional

from cloudhost.schemas.common import JoinedRecord


class HostChangeRecordResponse(JoinedRecord):
    """变更记录响应体；id 即变更序号。"""
    id: int
    ip: str
    sample_time: date
    operation_type: int
    operator: str
    old_value: str
    new_value: str
    remark: Optional[str] = None

    model_config = {"from_attributes": True}
