"""
笔记服务：按所有者隔离的增删改查
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import Settings
from notes_api.errors import BadRequest, NotFound
from notes_api.models.note import Note
from notes_api.utils.storage import remove_file_quietly, resolve_file_url

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "file_url")


class NoteService:
    """
    笔记存储操作
    
    所有读写都带 owner_id 条件：不属于当前用户的笔记与不存在的笔记一样返回 NotFound。
    update / delete 的读取与写入在同一个会话事务内完成，写语句再次带上 owner 条件。
    """

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def list(self, owner_id: str) -> List[Note]:
        """当前用户的笔记，按创建时间倒序"""
        result = await self.db.execute(
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, note_id: str, owner_id: str) -> Note:
        result = await self.db.execute(
            select(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        )
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFound()
        return note

    async def create(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        file_url: Optional[str] = None,
    ) -> Note:
        note = Note(
            owner_id=owner_id,
            title=title,
            description=description or None,  # 空字符串存为 NULL
            file_url=file_url,
        )
        self.db.add(note)
        await self.db.commit()
        await self.db.refresh(note)
        return note

    async def update(self, note_id: str, owner_id: str, changes: Dict[str, Any]) -> Note:
        """
        更新笔记
        
        Args:
            changes: 只包含请求中出现的字段（title / description / file_url）
        
        Raises:
            NotFound: 笔记不存在或不属于 owner
            BadRequest: 没有任何字段需要修改
        """
        note = await self.get(note_id, owner_id)

        values = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not values:
            raise BadRequest("No changes")
        if "description" in values:
            values["description"] = values["description"] or None

        old_file_url = note.file_url
        result = await self.db.execute(
            update(Note)
            .where(Note.id == note_id, Note.owner_id == owner_id)
            .values(**values)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFound()
        await self.db.commit()
        await self.db.refresh(note)

        # 新文件已落库，再删旧文件
        if "file_url" in values and old_file_url and old_file_url != note.file_url:
            self.remove_file(old_file_url)
        return note

    async def delete(self, note_id: str, owner_id: str):
        note = await self.get(note_id, owner_id)
        file_url = note.file_url

        result = await self.db.execute(
            delete(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFound()
        await self.db.commit()

        # 文件删除失败不回滚数据库
        if file_url:
            self.remove_file(file_url)

    def remove_file(self, file_url: str) -> bool:
        """尽力删除笔记引用的文件"""
        filepath = resolve_file_url(file_url, self.settings.upload_dir)
        if filepath is None:
            logger.warning("Refusing to delete file outside upload dir: %s", file_url)
            return False
        return remove_file_quietly(filepath)
