"""
Folders API - per-user folder tree
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import datetime
from pydantic import field_validator

from backend.database import get_db
from backend.models.user import User
from backend.api.auth import get_current_user
from backend.services import folder_service
from backend.services.folder_service import (
    FolderNotFoundError, FolderNotEmptyError, InvalidFolderParentError
)
from backend.utils.schemas import CamelModel, CamelORMModel
from backend.utils.validators import validate_folder_name

router = APIRouter()


# --- Pydantic Schemas ---

class FolderResponse(CamelORMModel):
    id: int
    user_id: str
    name: str
    parent_id: Optional[int] = None
    path: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FolderCreate(CamelModel):
    name: str
    parent_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_folder_name(v)


class FolderUpdate(CamelModel):
    name: Optional[str] = None
    parent_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return validate_folder_name(v) if v is not None else v


# --- Endpoints ---

@router.get("", response_model=List[FolderResponse])
async def list_folders(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All folders of the current user, ordered by name"""
    return await folder_service.list_folders(db, current_user.id)


@router.post("", response_model=FolderResponse)
async def create_folder(
    data: FolderCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a folder at the root or under a parent"""
    try:
        folder = await folder_service.create_folder(db, current_user.id, data.name, data.parent_id)
    except FolderNotFoundError:
        raise HTTPException(404, "Parent folder not found")
    await db.commit()
    await db.refresh(folder)
    return folder


@router.put("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    folder_id: int,
    data: FolderUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename and/or move a folder. Omitted fields keep their current value."""
    try:
        folder = await folder_service.get_user_folder(db, current_user.id, folder_id)
    except FolderNotFoundError:
        raise HTTPException(404, "Folder not found")

    name = data.name if data.name is not None else folder.name
    parent_id = data.parent_id if "parent_id" in data.model_fields_set else folder.parent_id

    try:
        folder = await folder_service.update_folder(db, folder, name, parent_id)
    except FolderNotFoundError:
        raise HTTPException(404, "Parent folder not found")
    except InvalidFolderParentError as e:
        raise HTTPException(400, str(e))

    await db.commit()
    await db.refresh(folder)
    return folder


@router.delete("/{folder_id}")
async def delete_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a folder that holds no files and no subfolders"""
    try:
        folder = await folder_service.get_user_folder(db, current_user.id, folder_id)
        await folder_service.delete_folder(db, folder)
    except FolderNotFoundError:
        raise HTTPException(404, "Folder not found")
    except FolderNotEmptyError as e:
        raise HTTPException(400, str(e))

    await db.commit()
    return {"success": True}
