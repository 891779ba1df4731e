"""
数据库连通性检查（站点本身不读写数据）
"""
import logging
import os

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

logger = logging.getLogger(__name__)


def ensure_sqlite_dir(database_url: str):
    """SQLite 文件所在目录不存在时创建"""
    if database_url.startswith("sqlite+aiosqlite:///"):
        db_dir = os.path.dirname(database_url.replace("sqlite+aiosqlite:///", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, pool_pre_ping=True)


async def ping_db(engine: AsyncEngine):
    """SELECT 1，失败记录日志后抛出，让启动中止"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database connection failed")
        raise
    logger.info("Database connected")
