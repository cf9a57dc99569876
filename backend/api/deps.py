"""
Dependencies for the long-lived services built in the application lifespan
"""
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.agents.command_interpreter.agent import CommandInterpreterAgent
from backend.agents.folder_planner.agent import FolderPlannerAgent
from backend.services.file_processor import FileProcessor
from backend.services.file_storage import FileStorageService
from backend.services.processing_queue import ProcessingQueue


def get_processing_queue(request: Request) -> ProcessingQueue:
    return request.app.state.processing_queue


def get_file_processor(request: Request) -> FileProcessor:
    return request.app.state.file_processor


def get_file_storage(request: Request) -> FileStorageService:
    return request.app.state.file_storage


def get_command_interpreter(request: Request) -> CommandInterpreterAgent:
    return request.app.state.command_interpreter


def get_folder_planner(request: Request) -> FolderPlannerAgent:
    return request.app.state.folder_planner


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory
