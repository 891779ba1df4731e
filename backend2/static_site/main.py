"""
静态站点 - FastAPI 入口
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from static_site.config import Settings
from static_site.database import create_engine, ensure_sqlite_dir, ping_db

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时检查数据库连接"""
    logging.basicConfig(level=app.state.settings.log_level.upper())
    ensure_sqlite_dir(app.state.settings.database_url)
    await ping_db(app.state.engine)
    yield
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Static Site", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        """健康检查"""
        return {"ok": True}

    @app.get("/")
    async def index():
        return FileResponse(str(PUBLIC_DIR / "index.html"))

    @app.get("/contact")
    async def contact():
        return FileResponse(str(PUBLIC_DIR / "contact.html"))

    # 其余 public/ 下的文件按原路径提供（放在最后，作为兜底）
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = Settings()
    uvicorn.run("static_site.main:app", host=settings.host, port=settings.port)
