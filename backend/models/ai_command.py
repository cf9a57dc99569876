"""
AI command model - a free-text instruction and Claude's classification of it
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from backend.database import Base


class CommandStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class CommandAction(str, Enum):
    MOVE_FILES = "move_files"
    ORGANIZE = "organize"
    SEARCH = "search"
    CREATE_FOLDER = "create_folder"
    RENAME = "rename"


class AICommand(Base):
    __tablename__ = "ai_commands"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    command = Column(Text, nullable=False)

    # {"action", "description", "parameters"} on success, {"error"} on failure
    result = Column(JSON, nullable=True)
    status = Column(String, nullable=False, default=CommandStatus.PENDING.value)

    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", back_populates="ai_commands")
