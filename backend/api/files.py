"""
Files API - upload with background OCR / AI processing, listing, edits, deletes
"""
import logging
from functools import partial
from typing import List, Optional, Dict, Any
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, Query
from pydantic import AliasChoices, Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import get_settings
from backend.database import get_db
from backend.models.user import User
from backend.models.file import UploadedFile, ProcessingStatus
from backend.api.auth import get_current_user
from backend.api.deps import get_file_processor, get_file_storage, get_processing_queue
from backend.services import folder_service
from backend.services.folder_service import FolderNotFoundError
from backend.services.file_processor import FileProcessor, ProcessingOptions
from backend.services.file_storage import FileStorageService
from backend.services.processing_queue import ProcessingQueue, QueueFullError
from backend.utils.helpers import parse_form_bool
from backend.utils.schemas import CamelModel, CamelORMModel
from backend.utils.validators import validate_processing_status

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter()

NON_NULLABLE_UPDATE_FIELDS = ("name", "original_name", "processing_status")


# ─── Schemas ───

class FileResponse(CamelORMModel):
    id: int
    user_id: str
    folder_id: Optional[int] = None
    name: str
    original_name: str
    size: int
    mime_type: str
    ocr_text: Optional[str] = None
    ai_summary: Optional[str] = None
    tags: Optional[List[str]] = None
    file_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias="file_metadata",
        serialization_alias="metadata",
    )
    processing_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FileUpdate(CamelModel):
    name: Optional[str] = None
    original_name: Optional[str] = None
    folder_id: Optional[int] = None
    tags: Optional[List[str]] = None
    file_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("metadata", "file_metadata"),
    )
    ocr_text: Optional[str] = None
    ai_summary: Optional[str] = None
    processing_status: Optional[str] = None

    @field_validator("processing_status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> Optional[str]:
        return validate_processing_status(v)


class FileMove(CamelModel):
    folder_id: Optional[int] = None


# ─── Helpers ───

async def _get_user_file(db: AsyncSession, user: User, file_id: int) -> UploadedFile:
    result = await db.execute(
        select(UploadedFile).where(UploadedFile.id == file_id, UploadedFile.user_id == user.id)
    )
    file = result.scalar_one_or_none()
    if not file:
        raise HTTPException(404, "File not found")
    return file


async def _ensure_folder(db: AsyncSession, user: User, folder_id: Optional[int]) -> None:
    if folder_id is None:
        return
    try:
        await folder_service.get_user_folder(db, user.id, folder_id)
    except FolderNotFoundError:
        raise HTTPException(404, "Folder not found")


def _parse_folder_id(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise HTTPException(400, "folderId must be an integer")


# ─── Endpoints ───

@router.get("", response_model=List[FileResponse])
async def list_files(
    folder_id: Optional[int] = Query(None, alias="folderId"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Files of the current user, newest first, optionally limited to one folder"""
    query = select(UploadedFile).where(UploadedFile.user_id == current_user.id)
    if folder_id is not None:
        query = query.where(UploadedFile.folder_id == folder_id)
    result = await db.execute(query.order_by(UploadedFile.created_at.desc(), UploadedFile.id.desc()))
    return result.scalars().all()


@router.post("/upload", response_model=List[FileResponse])
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    folder_id: Optional[str] = Form(None, alias="folderId"),
    process_ocr: Optional[str] = Form(None, alias="processOcr"),
    generate_summary: Optional[str] = Form(None, alias="generateSummary"),
    auto_tag: Optional[str] = Form(None, alias="autoTag"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorageService = Depends(get_file_storage),
    processor: FileProcessor = Depends(get_file_processor),
    queue: ProcessingQueue = Depends(get_processing_queue),
):
    """
    Store one or more files and queue each for processing.

    Returns immediately with every record in ``processing``; clients re-fetch
    the file to see ``completed`` or ``failed``.
    """
    if not files:
        raise HTTPException(400, "No files uploaded")

    if not queue.has_capacity(len(files)):
        raise HTTPException(503, "Processing queue is full, try again later")

    target_folder_id = _parse_folder_id(folder_id)
    await _ensure_folder(db, current_user, target_folder_id)

    options = ProcessingOptions(
        extract_text=parse_form_bool(process_ocr),
        generate_summary=parse_form_bool(generate_summary),
        auto_tag=parse_form_bool(auto_tag),
    )

    contents = []
    for upload in files:
        content = await upload.read()
        if len(content) > settings.MAX_FILE_SIZE:
            raise HTTPException(
                413,
                f"File '{upload.filename}' too large. Maximum size: {settings.MAX_FILE_SIZE // (1024 * 1024)}MB",
            )
        contents.append((upload, content))

    records = []
    for upload, content in contents:
        original_name = upload.filename or "file"
        stored_name, file_path = await storage.save(content, original_name, current_user.id)
        record = UploadedFile(
            user_id=current_user.id,
            folder_id=target_folder_id,
            name=stored_name,
            original_name=original_name,
            size=len(content),
            mime_type=upload.content_type or "application/octet-stream",
            file_path=file_path,
            processing_status=ProcessingStatus.PROCESSING.value,
        )
        db.add(record)
        records.append(record)
        logger.info(f"User {current_user.id} uploaded '{original_name}' ({len(content)} bytes)")

    await db.commit()
    for record in records:
        await db.refresh(record)

    rejected = False
    for record in records:
        try:
            queue.submit(f"file-{record.id}", partial(processor.process_file, record, options))
        except QueueFullError as e:
            logger.warning(f"Could not queue file {record.id}: {e}")
            record.processing_status = ProcessingStatus.FAILED.value
            rejected = True

    if rejected:
        await db.commit()

    return records


@router.get("/{file_id}", response_model=FileResponse)
async def get_file(
    file_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await _get_user_file(db, current_user, file_id)


@router.put("/{file_id}", response_model=FileResponse)
async def update_file(
    file_id: int,
    data: FileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Partial update of any editable field, processing results included"""
    file = await _get_user_file(db, current_user, file_id)

    changes = data.model_dump(exclude_unset=True)
    if "folder_id" in changes:
        await _ensure_folder(db, current_user, changes["folder_id"])
    # explicit nulls on NOT NULL columns mean "leave unchanged"
    for field in NON_NULLABLE_UPDATE_FIELDS:
        if field in changes and changes[field] is None:
            changes.pop(field)

    for field, value in changes.items():
        setattr(file, field, value)

    await db.commit()
    await db.refresh(file)
    return file


@router.put("/{file_id}/move", response_model=FileResponse)
async def move_file(
    file_id: int,
    data: FileMove,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move a file into a folder, or to the root with folderId null"""
    file = await _get_user_file(db, current_user, file_id)
    await _ensure_folder(db, current_user, data.folder_id)

    file.folder_id = data.folder_id
    await db.commit()
    await db.refresh(file)
    return file


@router.delete("/{file_id}")
async def delete_file(
    file_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Delete a file record and its stored bytes"""
    file = await _get_user_file(db, current_user, file_id)

    file_path = file.file_path
    await db.delete(file)
    await db.commit()

    # bytes go only once the row is gone
    await storage.delete(file_path)
    logger.info(f"User {current_user.id} deleted file {file_id} ({file.original_name})")
    return {"success": True}
