"""
笔记模型
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from datetime import datetime
import uuid

from notes_api.database import Base


class Note(Base):
    """笔记表"""
    __tablename__ = "notes"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(500), nullable=True)  # /uploads/<name>
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    def __repr__(self):
        return f"<Note {self.title}>"
