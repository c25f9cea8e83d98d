"""
状态枚举 (Status Enumerations)

整数编码与前端沿用的取值保持一致。
"""
import enum


class EnableStatus(enum.IntEnum):
    """启用状态 (Enable status)"""
    ACTIVE = 1
    DELETED = 2  # 逻辑删除 (soft-deleted)


class ManagementStatus(enum.IntEnum):
    """管理状态 (Management status)"""
    NORMAL = 1
    LOW_UTILIZATION = 2
    POOLABLE = 3  # 可申请，即公共池 (in the public pool)


class DeviceStatus(enum.IntEnum):
    """设备状态 (Device status)"""
    NORMAL = 1
    METRICS_MISSING = 2
    LOAD_ABNORMAL = 3


class ChangeOperation(enum.IntEnum):
    """变更记录的操作类型，两者互斥 (Change record operation kind, mutually exclusive)"""
    MANAGEMENT_STATUS = 1
    DEVICE_STATUS = 2


class TaskType(str, enum.Enum):
    """通道任务类型 (Channel task type)"""
    LIST = "LIST"
    DATA = "DATA"
    DETAIL = "DETAIL"
