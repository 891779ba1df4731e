"""
错误类型与统一异常处理

服务层只抛出 ApiError 子类，由这里集中映射为 HTTP 状态码与 {"error": message}。
"""
import logging
from typing import Any, Dict, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """业务错误基类"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ApiError):
    """缺少 / 无效 / 过期的 token"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Missing token"


class InvalidCredentials(ApiError):
    """登录失败（用户不存在与密码错误返回同一消息）"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Username or email already exists"


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class NotFound(ApiError):
    """资源不存在或不属于当前用户（两者不可区分）"""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(ApiError):
    """未预期错误；兜底处理器使用它的默认消息"""


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """把 pydantic 错误列表拼成一条消息：'<field>: <msg>, <field>: <msg>'"""
    parts = []
    for err in errors:
        # 去掉 FastAPI 附加的 body / form 前缀
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "form", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return ", ".join(parts)


def bad_request_from(exc: ValidationError) -> BadRequest:
    return BadRequest(format_validation_errors(exc.errors()))


async def api_error_handler(request: Request, exc: ApiError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ServerError.default_message},
    )


def register_exception_handlers(app: FastAPI):
    """注册统一异常处理"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
