"""
Input validation utilities
"""
from typing import Optional

from backend.models.file import ProcessingStatus


def validate_folder_name(name: str) -> str:
    """Folder names are non-empty and cannot contain the path separator"""
    name = name.strip()
    if not name:
        raise ValueError("Folder name must not be empty")
    if "/" in name:
        raise ValueError("Folder name must not contain '/'")
    return name


def validate_processing_status(status: Optional[str]) -> Optional[str]:
    """Validate a processing status value"""
    if status is None:
        return status
    valid = {s.value for s in ProcessingStatus}
    if status not in valid:
        raise ValueError(f"Invalid processing status. Must be one of: {sorted(valid)}")
    return status


def validate_command_text(command: str) -> str:
    """Commands must contain something besides whitespace"""
    command = command.strip()
    if not command:
        raise ValueError("Command must not be empty")
    return command
