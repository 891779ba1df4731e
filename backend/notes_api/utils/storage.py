"""
上传文件存储工具
"""
import logging
import os
import uuid
import aiofiles
from typing import Optional

from fastapi import UploadFile

from notes_api.errors import BadRequest

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024


async def save_upload(
    upload: UploadFile,
    upload_dir: str,
    max_bytes: int,
) -> str:
    """
    分块写入上传文件，超过大小限制时删除已写入部分并拒绝
    
    Args:
        upload: 上传的文件
        upload_dir: 存储目录
        max_bytes: 最大字节数
    
    Returns:
        保存的文件路径
    """
    # 生成唯一文件名，保留原扩展名
    ext = os.path.splitext(upload.filename or "")[1]
    unique_name = f"{uuid.uuid4().hex}{ext}"
    
    ensure_dir(upload_dir)
    filepath = os.path.join(upload_dir, unique_name)
    
    written = 0
    try:
        async with aiofiles.open(filepath, "wb") as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise BadRequest("File too large")
                await f.write(chunk)
    except BaseException:
        remove_file_quietly(filepath)
        raise
    
    return filepath


def get_file_url(filepath: str) -> str:
    """存储路径 -> 对外访问 URL（/uploads/<name>）"""
    return f"{UPLOADS_URL_PREFIX}/{os.path.basename(filepath)}"


def resolve_file_url(file_url: str, upload_dir: str) -> Optional[str]:
    """
    对外 URL -> 存储路径
    
    只取文件名部分，不允许跳出 upload_dir
    """
    if not file_url or not file_url.startswith(UPLOADS_URL_PREFIX + "/"):
        return None
    name = os.path.basename(file_url)
    if not name or name in (".", ".."):
        return None
    return os.path.join(upload_dir, name)


def remove_file_quietly(filepath: Optional[str]) -> bool:
    """尽力删除文件：失败只记日志，不向上抛"""
    if not filepath:
        return False
    try:
        os.remove(filepath)
        return True
    except FileNotFoundError:
        logger.warning("File already gone: %s", filepath)
    except OSError as e:
        logger.warning("Failed to delete file %s: %s", filepath, e)
    return False


def ensure_dir(path: str):
    """确保目录存在"""
    os.makedirs(path, exist_ok=True)
