"""
应用配置模块 (Application Configuration Module)

使用 Pydantic Settings 管理 CloudHost 后端的所有配置项，支持从 .env 文件和环境变量读取。
涵盖数据库连接、Redis 缓存、JWT 认证、分页上限、请求超时和首页统计阈值。

Uses Pydantic Settings to manage all configuration items for the CloudHost backend,
supporting reading from .env files and environment variables. Covers database connections,
Redis cache, JWT authentication, paging limits, request timeouts, and dashboard thresholds.
"""
import logging
import secrets

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    应用全局配置类 (Application Global Configuration Class)

    字段名自动映射同名环境变量（不区分大小写），支持 .env 文件加载。

    Field names map to same-named environment variables (case insensitive),
    with .env file loading support.
    """

    # 数据库配置 (Database Configuration)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "cloudhost"
    postgres_user: str = "cloudhost"
    postgres_password: str = "cloudhost_dev_password"
    # 完整连接串，设置后优先于 postgres_* 字段 (Full URL, takes precedence over postgres_* fields)
    database_url_override: str = ""

    # Redis 配置 (Redis Configuration)
    redis_host: str = "localhost"
    redis_port: int = 6379

    # JWT 认证配置 (JWT Authentication Configuration)
    # ⚠️ 生产环境必须通过环境变量 JWT_SECRET_KEY 设置！
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 120
    # 换取令牌所需的 API Key (API key exchanged for operator tokens)
    api_key: str = "cloudhost-dev-api-key"

    # 查询配置 (Query Configuration)
    request_timeout_seconds: float = 10.0

    # 新主机 IP 分配 (New host IP allocation)
    ip_allocation_attempts: int = 20

    # 首页统计 (Dashboard statistics)
    dashboard_cache_ttl: int = 30  # 秒 (seconds)
    high_cpu_threshold: float = 80.0
    high_memory_threshold: float = 85.0
    high_disk_threshold: float = 90.0

    environment: str = "development"
    frontend_url: str = "http://localhost:3000"

    @property
    def database_url(self) -> str:
        """构造 PostgreSQL 异步连接 URL (Build PostgreSQL async connection URL for asyncpg)."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def redis_url(self) -> str:
        return f"redis://{self.redis_host}:{self.redis_port}/0"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# 全局配置实例 (Global Configuration Instance)
settings = Settings()

# JWT 密钥安全检查：未设置时生成随机密钥并警告
if not settings.jwt_secret_key or settings.jwt_secret_key == "change-me-in-production":
    settings.jwt_secret_key = secrets.token_urlsafe(64)
    logger.warning(
        "JWT_SECRET_KEY 未设置，已自动生成随机密钥，重启后已签发的 token 将失效。"
        " | JWT_SECRET_KEY not set, using auto-generated random key. "
        "All issued tokens will be invalidated on restart."
    )
