"""
Folder tree maintenance - ownership checks, materialized paths, guarded deletes
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from backend.agents.folder_planner.agent import FolderSuggestion
from backend.models.file import UploadedFile
from backend.models.folder import Folder
from backend.utils.helpers import build_folder_path

logger = logging.getLogger(__name__)


class FolderNotFoundError(Exception):
    pass


class FolderNotEmptyError(Exception):
    pass


class InvalidFolderParentError(Exception):
    pass


async def get_user_folder(db: AsyncSession, user_id: str, folder_id: int) -> Folder:
    result = await db.execute(
        select(Folder).where(Folder.id == folder_id, Folder.user_id == user_id)
    )
    folder = result.scalar_one_or_none()
    if folder is None:
        raise FolderNotFoundError(f"Folder {folder_id} not found")
    return folder


async def list_folders(db: AsyncSession, user_id: str) -> Sequence[Folder]:
    result = await db.execute(
        select(Folder).where(Folder.user_id == user_id).order_by(Folder.name.asc())
    )
    return result.scalars().all()


async def create_folder(
    db: AsyncSession,
    user_id: str,
    name: str,
    parent_id: Optional[int] = None,
) -> Folder:
    """Create a folder whose path is the parent's current path plus its name"""
    parent_path = None
    if parent_id is not None:
        parent = await get_user_folder(db, user_id, parent_id)
        parent_path = parent.path

    folder = Folder(
        user_id=user_id,
        name=name,
        parent_id=parent_id,
        path=build_folder_path(name, parent_path),
    )
    db.add(folder)
    await db.flush()
    return folder


async def update_folder(
    db: AsyncSession,
    folder: Folder,
    name: str,
    parent_id: Optional[int],
) -> Folder:
    """
    Rename and/or re-parent a folder and recompute its own path.

    Descendant paths are left as they are, so after renaming or moving a
    folder its subfolders keep their old stored path.
    """
    parent_path = None
    if parent_id is not None:
        if parent_id == folder.id:
            raise InvalidFolderParentError("A folder cannot be its own parent")
        parent = await get_user_folder(db, folder.user_id, parent_id)
        await _ensure_not_descendant(db, folder, parent)
        parent_path = parent.path

    folder.name = name
    folder.parent_id = parent_id
    folder.path = build_folder_path(name, parent_path)
    await db.flush()
    return folder


async def _ensure_not_descendant(db: AsyncSession, folder: Folder, new_parent: Folder) -> None:
    """Walk up from the new parent; meeting the folder itself would create a cycle"""
    seen = set()
    current = new_parent
    while current.parent_id is not None and current.id not in seen:
        seen.add(current.id)
        if current.parent_id == folder.id:
            raise InvalidFolderParentError("A folder cannot be moved into its own subfolder")
        current = await db.get(Folder, current.parent_id)
        if current is None:
            break


async def delete_folder(db: AsyncSession, folder: Folder) -> None:
    """Delete an empty folder; raises FolderNotEmptyError when anything references it"""
    file_count = await db.scalar(
        select(func.count(UploadedFile.id)).where(UploadedFile.folder_id == folder.id)
    )
    subfolder_count = await db.scalar(
        select(func.count(Folder.id)).where(Folder.parent_id == folder.id)
    )
    if file_count or subfolder_count:
        raise FolderNotEmptyError("Cannot delete folder with files or subfolders")

    await db.delete(folder)
    await db.flush()


async def create_folders_from_plan(
    db: AsyncSession,
    user_id: str,
    plan: List[FolderSuggestion],
) -> List[Folder]:
    """
    Create folders in plan order. A suggestion's parent_id is the 1-based
    position of an earlier suggestion; anything else lands at the root.
    """
    created: dict[int, Folder] = {}
    folders = []

    for position, suggestion in enumerate(plan, start=1):
        name = suggestion.name.strip().replace("/", "-")
        if not name:
            logger.warning(f"Skipping unnamed folder at position {position} of the plan")
            continue

        parent = created.get(suggestion.parent_id) if suggestion.parent_id is not None else None
        if suggestion.parent_id is not None and parent is None:
            logger.warning(
                f"Folder '{name}' references unknown parent {suggestion.parent_id}; creating it at the root"
            )

        folder = Folder(
            user_id=user_id,
            name=name,
            parent_id=parent.id if parent else None,
            path=build_folder_path(name, parent.path if parent else None),
        )
        db.add(folder)
        await db.flush()

        created[position] = folder
        folders.append(folder)

    return folders
