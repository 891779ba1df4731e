"""
认证相关 Schema
"""
from pydantic import BaseModel, EmailStr, Field, field_validator

EMAIL_MAX_LENGTH = 100


class LoginRequest(BaseModel):
    """登录请求"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)


class RegisterRequest(BaseModel):
    """注册请求"""
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email should have at most {EMAIL_MAX_LENGTH} characters")
        return v


class TokenResponse(BaseModel):
    """认证响应"""
    token: str
