"""
用户模型
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime
import uuid

from notes_api.database import Base


class User(Base):
    """用户表（注册后不可修改）"""
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    def __repr__(self):
        return f"<User {self.username}>"
