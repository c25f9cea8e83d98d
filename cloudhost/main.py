"""
云主机管理服务应用入口 (Cloud Host Service Application Entry)

负责 FastAPI 应用的生命周期、中间件、异常处理器和路由注册。

Owns the FastAPI application lifecycle, middleware, exception handlers and router registration.

主要功能 (Main Features):
- 启动时自动建表 (Create tables at startup)
- 请求超时中间件与 CORS (Request timeout middleware and CORS)
- 健康检查：数据库与 Redis 连通性 (Health check with database and Redis connectivity)
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from cloudhost import __version__
from cloudhost.core.config import settings
from cloudhost.core.database import Base, engine
from cloudhost.core.exceptions import register_exception_handlers
from cloudhost.core.middleware import RequestTimeoutMiddleware
from cloudhost.core.redis import close_redis, get_redis
# 导入所有模型以确保表注册 (Import all models so their tables are registered)
from cloudhost.models import ChannelDetail, ChannelSummary, Host, HostChangeRecord, HostMetric, InefficientHost  # noqa: F401
from cloudhost.routers import (
    auth,
    change_records,
    channels,
    dashboard,
    hosts,
    inefficient_hosts,
    metrics,
    public_pool,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理器 (Application Lifecycle Manager)

    启动时创建数据库表，关闭时释放 Redis 连接与数据库连接池。
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Cloud host service started (%s)", settings.environment)

    yield

    await close_redis()
    await engine.dispose()


app = FastAPI(
    title="Cloud Host Service",
    description="云主机台账、公共池与指标查询服务 | Cloud host inventory, public pool and metrics query service",
    version=__version__,
    lifespan=lifespan,
)

# 注册全局异常处理器 (Register global exception handlers)
register_exception_handlers(app)

# 请求超时中间件 (Request timeout middleware)
app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

# 生产环境限制跨域来源 (Restrict CORS origins in production)
is_production = settings.environment.lower() == "production"
allowed_origins = [settings.frontend_url] if is_production else ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth.router)  # 操作员令牌 (Operator tokens)
app.include_router(hosts.router)  # 云主机 (Cloud hosts)
app.include_router(public_pool.router)  # 公共池 (Public pool)
app.include_router(inefficient_hosts.router)  # 低效主机 (Inefficient hosts)
app.include_router(metrics.router)  # 主机指标 (Host metrics)
app.include_router(channels.router)  # 通道指标 (Channel metrics)
app.include_router(change_records.router)  # 状态变更记录 (Status change records)
app.include_router(dashboard.router)  # 首页统计 (Dashboard statistics)


@app.get("/health")
@app.get("/api/v1/health")
async def health():
    """
    健康检查接口 (Health Check Endpoint)

    所有组件正常返回 ok，否则返回 degraded。
    """
    checks = {"api": "ok"}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", e)
        checks["database"] = "error"

    try:
        r = await get_redis()
        await r.ping()
        checks["redis"] = "ok"
    except Exception as e:
        logger.warning("Health check: redis unreachable: %s", e)
        checks["redis"] = "error"

    status = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
    return {
        "status": status,
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
