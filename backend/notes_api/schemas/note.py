"""
笔记相关 Schema
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class NoteCreate(BaseModel):
    """创建笔记（multipart 表单字段）"""
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=10000)


class NoteUpdate(BaseModel):
    """更新笔记，字段均可选"""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=10000)


class NoteOut(BaseModel):
    """笔记响应"""
    id: str
    title: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    uploaded_by: str
    created_at: datetime
