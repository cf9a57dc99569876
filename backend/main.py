"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import get_settings
from backend.database import engine, create_tables, AsyncSessionLocal
from backend.agents.command_interpreter.agent import CommandInterpreterAgent
from backend.agents.document_intelligence.agent import DocumentIntelligenceAgent
from backend.agents.folder_planner.agent import FolderPlannerAgent
from backend.services.claude_service import ClaudeService
from backend.services.file_processor import FileProcessor
from backend.services.file_storage import FileStorageService
from backend.services.ocr_service import OCRService
from backend.services.processing_queue import ProcessingQueue
from backend.utils.logger import get_logger
from backend.api import auth, folders, files, ai, onboarding

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_logger()

    await create_tables()
    logger.info("Database tables created")

    # Long-lived collaborators, shared by every request and worker
    claude = ClaudeService(settings)
    if not claude.is_available:
        logger.warning("ANTHROPIC_API_KEY is not set - summaries, tags and commands will fail")

    app.state.session_factory = AsyncSessionLocal
    app.state.file_storage = FileStorageService(settings.UPLOAD_DIR)
    app.state.file_processor = FileProcessor(
        session_factory=AsyncSessionLocal,
        ocr=OCRService(settings),
        documents=DocumentIntelligenceAgent(claude),
    )
    app.state.command_interpreter = CommandInterpreterAgent(claude)
    app.state.folder_planner = FolderPlannerAgent(claude)

    queue = ProcessingQueue(
        workers=settings.PROCESSING_WORKERS,
        max_size=settings.PROCESSING_QUEUE_SIZE,
    )
    queue.start()
    app.state.processing_queue = queue

    yield

    await queue.stop()
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(onboarding.router, prefix="/api/onboarding", tags=["Onboarding"])
app.include_router(folders.router, prefix="/api/folders", tags=["Folders"])
app.include_router(files.router, prefix="/api/files", tags=["Files"])
app.include_router(ai.router, prefix="/api/ai", tags=["AI Commands"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
