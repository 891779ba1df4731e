"""
认证路由
"""
from fastapi import APIRouter, Depends, status

from notes_api.dependencies import get_account_service
from notes_api.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from notes_api.services.accounts import AccountService

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    accounts: AccountService = Depends(get_account_service)
):
    """用户注册"""
    token = await accounts.register(req.username, req.email, req.password)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    accounts: AccountService = Depends(get_account_service)
):
    """用户登录"""
    token = await accounts.login(req.username, req.password)
    return TokenResponse(token=token)
