"""
数据库连接模块 (Database Connection Module)

基于 SQLAlchemy 2.0 异步模式创建数据库引擎和会话工厂，定义 ORM 基类和会话依赖。
查询服务通过注入的会话访问存储：生产环境为 PostgreSQL，测试环境为内存 SQLite。

Creates the database engine and session factory in SQLAlchemy 2.0 async mode, and defines
the ORM base class and session dependency. Query services reach the store through an injected
session: PostgreSQL in production, in-memory SQLite in tests.
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from cloudhost.core.config import settings

engine = create_async_engine(settings.database_url, echo=False)

# 提交后不过期对象，便于序列化已保存的数据 (Don't expire objects after commit)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    """ORM 模型基类 (ORM model base class)."""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI 依赖项：获取数据库会话 (FastAPI Dependency: Get Database Session)

    请求结束时关闭会话；未提交的变更随会话关闭一起回滚，保证变更全有或全无。

    The session is closed when the request ends; uncommitted changes are rolled back
    with it, so a failed mutation leaves no partial writes.
    """
    async with async_session() as session:
        yield session
