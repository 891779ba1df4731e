"""
配置管理 - 从环境变量加载所有配置
"""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置"""

    # ===== 数据库 =====
    database_url: str = "sqlite+aiosqlite:///./data/notes.db"

    # ===== 上传 =====
    upload_dir: str = "./uploads"
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB

    # ===== JWT =====
    jwt_secret: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # ===== CORS =====
    # 逗号分隔；为空表示不限制来源
    allowed_origins: str = ""

    # ===== 服务配置 =====
    backend_host: str = "0.0.0.0"
    backend_port: int = Field(4000, validation_alias=AliasChoices("PORT", "BACKEND_PORT", "backend_port"))
    debug: bool = False
    log_level: str = "INFO"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",")]
        return [o for o in origins if o] or ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """进程级配置（测试中直接构造 Settings 传给 create_app）"""
    return Settings()
