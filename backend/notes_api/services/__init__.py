"""
服务层
"""
from notes_api.services.accounts import AccountService
from notes_api.services.notes import NoteService

__all__ = [
    "AccountService",
    "NoteService",
]
