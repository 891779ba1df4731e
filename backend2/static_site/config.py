"""
静态站点配置
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """静态站点配置"""

    database_url: str = "sqlite+aiosqlite:///./data/site.db"
    host: str = "0.0.0.0"
    port: int = Field(6000, validation_alias=AliasChoices("PORT", "port"))
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
