"""
安全工具模块 (Security Tools Module)

签发和解析操作员 JWT 访问令牌。令牌的 sub 字段即操作人名称，写入状态变更记录。

Issues and decodes operator JWT access tokens. The token subject is the operator
name that is written onto status change records.
"""
import secrets
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from cloudhost.core.config import settings


def verify_api_key(candidate: str) -> bool:
    """以常量时间比较 API Key (Compare the API key in constant time)."""
    return secrets.compare_digest(candidate.encode(), settings.api_key.encode())


def create_access_token(subject: str) -> str:
    """
    生成访问令牌 (Generate access token)

    Args:
        subject (str): 操作人名称 (Operator name)

    Returns:
        str: JWT 访问令牌字符串 (JWT access token string)
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return jwt.encode(
        {"sub": subject, "exp": expire, "type": "access"},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    """解析 JWT 令牌，签名无效或过期时返回 None (Decode JWT, None on invalid signature or expiry)."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
