"""
数据库连接与会话管理
"""
import os
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from notes_api.config import Settings

# 声明基类
Base = declarative_base()


def ensure_sqlite_dir(database_url: str):
    """SQLite 文件所在目录不存在时创建（启动时调用，不在导入时）"""
    if database_url.startswith("sqlite+aiosqlite:///"):
        db_dir = os.path.dirname(database_url.replace("sqlite+aiosqlite:///", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)


def create_engine(settings: Settings) -> AsyncEngine:
    """创建异步引擎（不触碰文件系统）"""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        future=True,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """创建异步会话工厂"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话（依赖注入用）"""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(engine: AsyncEngine):
    """初始化数据库（创建所有表）"""
    # 必须先导入所有模型，确保它们都已注册到 Base.metadata
    from notes_api import models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

