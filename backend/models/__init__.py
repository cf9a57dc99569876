from backend.models.user import User
from backend.models.folder import Folder
from backend.models.file import UploadedFile, ProcessingStatus
from backend.models.ai_command import AICommand, CommandStatus, CommandAction

__all__ = [
    "User",
    "Folder",
    "UploadedFile",
    "ProcessingStatus",
    "AICommand",
    "CommandStatus",
    "CommandAction",
]
