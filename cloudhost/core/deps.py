"""
FastAPI 依赖项模块 (FastAPI Dependencies Module)

提供操作员身份认证和通用列表查询参数的依赖注入函数。

Provides dependency injection functions for operator authentication and the
shared list query parameters.
"""
from datetime import date

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cloudhost.core.security import decode_token
from cloudhost.services.query import ListParams

# Bearer Token 认证方案 (Bearer Token Authentication Scheme)
security = HTTPBearer()


async def get_current_operator(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """
    从请求头中提取并验证 JWT，返回操作人名称 (Validate the bearer JWT and return the operator name)

    操作人名称会写入主机状态变更记录的 operator 字段。
    """
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    operator = payload.get("sub")
    if not operator:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return operator


def get_list_params(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1),
    search: str | None = Query(None, description="不区分大小写的子串搜索 (case-insensitive substring search)"),
    start_time: date | None = Query(None, description="起始日期（含） (inclusive lower date bound)"),
    end_time: date | None = Query(None, description="结束日期（含） (inclusive upper date bound)"),
    sort_by: str | None = None,
    order: str = Query("asc", pattern="^(asc|desc)$"),
    include_deleted: bool = False,
) -> ListParams:
    """所有列表接口共用的分页/过滤/排序参数 (Paging, filter and sort parameters shared by every list endpoint)."""
    return ListParams(
        page=page,
        page_size=page_size,
        search=search,
        start_time=start_time,
        end_time=end_time,
        sort_by=sort_by,
        order=order,
        include_deleted=include_deleted,
    )
