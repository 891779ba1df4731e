"""
数据模型
"""
from notes_api.models.user import User
from notes_api.models.note import Note

__all__ = [
    "User",
    "Note",
]
