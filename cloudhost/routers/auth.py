"""
认证路由模块 (Authentication Router)

功能说明：以 API Key 换取操作员 JWT 访问令牌。
令牌的 sub 为操作人名称，后续主机状态变更记录的 operator 字段即取自该值。
API端点：POST /api/v1/auth/token
"""
import logging

from fastapi import APIRouter, HTTPException, status

from cloudhost.core.security import create_access_token, verify_api_key
from cloudhost.schemas.auth import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def issue_token(data: TokenRequest):
    """
    签发操作员令牌 (Issue operator token)

    Raises:
        HTTPException 401: API Key 不正确
    """
    if not verify_api_key(data.api_key):
        logger.warning("Token request rejected for operator %s", data.operator)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return TokenResponse(access_token=create_access_token(data.operator))
