"""File storage on the local filesystem, one directory per user."""
import logging
import os
import uuid
from typing import Optional
from pathlib import Path

import aiofiles

from backend.config import get_settings

logger = logging.getLogger(__name__)


class FileStorageService:
    """Writes and removes uploaded file bytes under UPLOAD_DIR."""

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = Path(base_path or get_settings().UPLOAD_DIR)
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def save(self, file_bytes: bytes, original_name: str, user_id: str) -> tuple[str, str]:
        """Save file bytes. Returns (stored name, storage path)."""
        ext = Path(original_name).suffix.lower()
        stored_name = f"{uuid.uuid4().hex}{ext}"

        user_dir = self.base_path / user_id
        user_dir.mkdir(parents=True, exist_ok=True)
        file_path = user_dir / stored_name

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(file_bytes)
        return stored_name, str(file_path)

    async def delete(self, storage_path: str) -> None:
        """Delete stored bytes; a file that is already gone is only logged."""
        try:
            os.remove(storage_path)
        except FileNotFoundError:
            logger.warning(f"File already deleted: {storage_path}")
