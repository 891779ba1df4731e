"""
账号服务：注册 / 登录
"""
import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from notes_api.config import Settings
from notes_api.errors import Conflict, InvalidCredentials
from notes_api.models.user import User
from notes_api.utils.auth import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)


class AccountService:
    """用户凭据存储操作，成功时返回签发的 token"""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def register(self, username: str, email: str, password: str) -> str:
        """注册新用户，用户名或邮箱已存在时抛 Conflict"""
        result = await self.db.execute(
            select(User.id).where(or_(User.username == username, User.email == email))
        )
        if result.first() is not None:
            logger.info("Registration rejected, username or email taken: %s", username)
            raise Conflict()

        # bcrypt 较慢，放到线程池避免阻塞事件循环
        password_hash = await run_in_threadpool(hash_password, password)
        user = User(username=username, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # 并发注册撞上唯一约束
            await self.db.rollback()
            raise Conflict()
        await self.db.refresh(user)

        logger.info("Registered user %s", user.id)
        return issue_token(user.id, user.username, self.settings)

    async def login(self, username: str, password: str) -> str:
        """登录；用户不存在与密码错误返回同一个错误"""
        result = await self.db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()

        if user is None or not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("Login failed for %s", username)
            raise InvalidCredentials()

        return issue_token(user.id, user.username, self.settings)
