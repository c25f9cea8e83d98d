"""
首页统计路由模块 (Dashboard Router)

API端点：GET /dashboard/stats
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.database import get_db
from cloudhost.core.deps import get_current_operator
from cloudhost.core.redis import get_redis
from cloudhost.schemas.dashboard import DashboardStats
from cloudhost.services.dashboard import get_dashboard_stats

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    operator: str = Depends(get_current_operator),
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """首页统计，缓存 dashboard_cache_ttl 秒，主机变更后失效。"""
    return await get_dashboard_stats(db, redis)
