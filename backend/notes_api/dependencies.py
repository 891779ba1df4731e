"""
依赖注入：配置、服务、当前用户
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import Settings
from notes_api.database import get_db
from notes_api.errors import Unauthenticated
from notes_api.services.accounts import AccountService
from notes_api.services.notes import NoteService
from notes_api.utils.auth import CurrentUser, verify_token

# auto_error=False：缺失 token 时由我们返回统一的 401 {"error": ...}
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """当前应用实例的配置"""
    return request.app.state.settings


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    鉴权：从 Authorization: Bearer <token> 取出身份

    Raises:
        Unauthenticated: 缺少 token，或 token 签名 / 过期校验失败
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Missing token")
    return verify_token(credentials.credentials, settings)


def get_account_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(db, settings)


def get_note_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> NoteService:
    return NoteService(db, settings)
