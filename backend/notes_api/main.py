"""
笔记 API - FastAPI 入口
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from notes_api.config import Settings, get_settings
from notes_api.database import create_engine, create_session_factory, ensure_sqlite_dir, init_db
from notes_api.errors import register_exception_handlers
from notes_api.routers import auth, notes
from notes_api.utils.storage import UPLOADS_URL_PREFIX, ensure_dir

logger = logging.getLogger(__name__)


def prepare_storage(settings: Settings):
    """创建 SQLite 数据目录与上传目录"""
    ensure_sqlite_dir(settings.database_url)
    ensure_dir(settings.upload_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    prepare_storage(settings)

    # 启动时建表，同时充当数据库连通性检查
    await init_db(app.state.engine)
    logger.info("Database ready: %s", app.state.engine.url.render_as_string(hide_password=True))
    logger.info("Serving uploads from %s", settings.upload_dir)

    yield

    # 关闭时释放连接池
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """按配置构造应用；引擎与会话工厂挂在 app.state 上，由依赖注入取用"""
    settings = settings or get_settings()

    app = FastAPI(
        title="Notes API",
        description="注册登录 + 个人笔记增删改查（可附带一个文件）",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    # CORS：ALLOWED_ORIGINS 为空时不限制来源
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 注册路由
    app.include_router(auth.router, prefix="/api/auth", tags=["认证"])
    app.include_router(notes.router, prefix="/api/notes", tags=["笔记"])

    # 上传文件静态访问（目录在 lifespan 中创建）
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health():
        """健康检查"""
        return {"ok": True}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "notes_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug,
    )
