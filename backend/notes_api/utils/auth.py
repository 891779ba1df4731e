"""
认证工具函数
"""
from dataclasses import dataclass
from passlib.context import CryptContext
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from notes_api.config import Settings
from notes_api.errors import Unauthenticated

# 密码哈希上下文
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class CurrentUser:
    """token 中携带的身份"""
    id: str
    username: str


def hash_password(password: str) -> str:
    """哈希密码"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    创建 JWT Access Token
    
    Args:
        data: payload（至少包含 sub）
        settings: 提供密钥与算法
        expires_delta: 自定义过期时间
    """
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(days=settings.jwt_expire_days))
    to_encode = {**data, "exp": expire, "iat": now}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """解码 JWT Token，返回 payload（签名或过期校验失败返回 None）"""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def issue_token(user_id: str, username: str, settings: Settings) -> str:
    """签发登录 token（默认 7 天有效）"""
    return create_access_token({"sub": str(user_id), "username": username}, settings)


def verify_token(token: str, settings: Settings) -> CurrentUser:
    """校验 token 并返回身份，任何失败都抛 Unauthenticated"""
    payload = decode_access_token(token, settings)
    if not payload or not payload.get("sub"):
        raise Unauthenticated("Invalid or expired token")
    return CurrentUser(id=str(payload["sub"]), username=payload.get("username", ""))
