"""
Test fixtures - throwaway SQLite database + authenticated HTTP client
"""
from unittest.mock import AsyncMock, MagicMock

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from backend.database import Base, get_db
from backend.main import app
from backend.api.auth import create_access_token
from backend.api.deps import (
    get_command_interpreter, get_file_processor, get_file_storage,
    get_folder_planner, get_processing_queue, get_session_factory,
)
from backend.agents.command_interpreter.agent import CommandInterpreterAgent
from backend.agents.document_intelligence.agent import DocumentIntelligenceAgent
from backend.agents.folder_planner.agent import FolderPlannerAgent
from backend.models.user import User
from backend.services.claude_service import ClaudeService
from backend.services.file_processor import FileProcessor
from backend.services.file_storage import FileStorageService
from backend.services.ocr_service import OCRService
from backend.services.processing_queue import ProcessingQueue


@pytest_asyncio.fixture()
async def session_factory(tmp_path):
    """Fresh SQLite database per test; a file so background sessions see the same data"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Insert baseline test data: two users"""
    user = User(id="user-1", email="test@example.com", first_name="Test", last_name="User")
    other = User(id="user-2", email="other@example.com", first_name="Other", last_name="User")

    db_session.add_all([user, other])
    await db_session.commit()
    await db_session.refresh(user)
    await db_session.refresh(other)

    return {"user": user, "other": other}


@pytest_asyncio.fixture()
async def claude():
    """Claude service whose calls are mocked per test"""
    service = MagicMock(spec=ClaudeService)
    service.is_available = True
    service.generate_response = AsyncMock()
    service.generate_structured_response = AsyncMock()
    return service


@pytest_asyncio.fixture()
async def ocr():
    service = MagicMock(spec=OCRService)
    service.extract_text = AsyncMock(return_value="")
    return service


@pytest_asyncio.fixture()
async def services(session_factory, claude, ocr, tmp_path):
    """The collaborators normally built in the lifespan; the queue is not started"""
    documents = DocumentIntelligenceAgent(claude, text_limit=10_000)
    return {
        "documents": documents,
        "file_processor": FileProcessor(session_factory, ocr, documents),
        "file_storage": FileStorageService(str(tmp_path / "uploads")),
        "command_interpreter": CommandInterpreterAgent(claude),
        "folder_planner": FolderPlannerAgent(claude),
        "processing_queue": ProcessingQueue(workers=2, max_size=10),
    }


def _override_dependencies(db_session, session_factory, services):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_processing_queue] = lambda: services["processing_queue"]
    app.dependency_overrides[get_file_processor] = lambda: services["file_processor"]
    app.dependency_overrides[get_file_storage] = lambda: services["file_storage"]
    app.dependency_overrides[get_command_interpreter] = lambda: services["command_interpreter"]
    app.dependency_overrides[get_folder_planner] = lambda: services["folder_planner"]


@pytest_asyncio.fixture()
async def client(db_session, session_factory, seed_data, services):
    """Authenticated httpx AsyncClient bound to the FastAPI app"""
    _override_dependencies(db_session, session_factory, services)

    token = create_access_token(data={"sub": seed_data["user"].id, "email": seed_data["user"].email})

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        ac.headers["Authorization"] = f"Bearer {token}"
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauth_client(db_session, session_factory, services):
    """Unauthenticated httpx AsyncClient"""
    _override_dependencies(db_session, session_factory, services)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
