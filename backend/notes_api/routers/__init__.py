"""
API 路由
"""
from notes_api.routers import auth, notes

__all__ = [
    "auth",
    "notes",
]
