"""
认证相关请求/响应模型
"""
from pydantic import BaseModel, Field


class TokenRequest(BaseModel):
    """以 API Key 换取操作员令牌的请求体。"""
    operator: str = Field(..., min_length=1, max_length=100, description="操作人名称")
    api_key: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
