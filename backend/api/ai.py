"""
AI command API - free-text file-management commands classified by Claude
"""
import logging
from functools import partial
from typing import List, Optional, Dict, Any
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.database import get_db
from backend.models.user import User
from backend.models.ai_command import AICommand, CommandStatus
from backend.api.auth import get_current_user
from backend.api.deps import get_command_interpreter, get_processing_queue, get_session_factory
from backend.agents.command_interpreter.agent import CommandInterpreterAgent, COMMAND_FAILED_RESULT
from backend.services.processing_queue import ProcessingQueue, QueueFullError
from backend.utils.schemas import CamelModel, CamelORMModel
from backend.utils.validators import validate_command_text

logger = logging.getLogger(__name__)

router = APIRouter()


class CommandRequest(CamelModel):
    command: str = Field(min_length=1)

    @field_validator("command")
    @classmethod
    def check_command(cls, v: str) -> str:
        return validate_command_text(v)


class CommandResponse(CamelORMModel):
    id: int
    user_id: str
    command: str
    result: Optional[Dict[str, Any]] = None
    status: str
    created_at: Optional[datetime] = None


@router.post("/command", response_model=CommandResponse)
async def submit_command(
    data: CommandRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    interpreter: CommandInterpreterAgent = Depends(get_command_interpreter),
    queue: ProcessingQueue = Depends(get_processing_queue),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Store the command and queue it for interpretation"""
    if not queue.has_capacity():
        raise HTTPException(503, "Processing queue is full, try again later")

    command = AICommand(
        user_id=current_user.id,
        command=data.command,
        status=CommandStatus.PROCESSING.value,
    )
    db.add(command)
    await db.commit()
    await db.refresh(command)

    try:
        queue.submit(
            f"command-{command.id}",
            partial(interpreter.process_command, session_factory, command.id, command.command),
        )
    except QueueFullError as e:
        logger.warning(f"Could not queue command {command.id}: {e}")
        command.status = CommandStatus.FAILED.value
        command.result = COMMAND_FAILED_RESULT
        await db.commit()

    return command


@router.get("/commands", response_model=List[CommandResponse])
async def list_commands(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Commands of the current user, newest first"""
    result = await db.execute(
        select(AICommand)
        .where(AICommand.user_id == current_user.id)
        .order_by(AICommand.created_at.desc(), AICommand.id.desc())
    )
    return result.scalars().all()
