"""
工具函数
"""
from notes_api.utils.auth import (
    CurrentUser,
    create_access_token,
    decode_access_token,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from notes_api.utils.storage import save_upload, get_file_url, resolve_file_url, remove_file_quietly, ensure_dir

__all__ = [
    "CurrentUser",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "issue_token",
    "verify_password",
    "verify_token",
    "save_upload",
    "get_file_url",
    "resolve_file_url",
    "remove_file_quietly",
    "ensure_dir",
]
