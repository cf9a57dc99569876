"""
File processing pipeline: OCR -> summary -> tags -> status
"""
import logging
from dataclasses import dataclass
from typing import Any, List

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.agents.document_intelligence.agent import DocumentIntelligenceAgent
from backend.models.file import UploadedFile, ProcessingStatus
from backend.services.ocr_service import OCRService, is_ocr_supported

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingOptions:
    extract_text: bool = True
    generate_summary: bool = True
    auto_tag: bool = True


class FileProcessor:
    """
    Runs the processing steps for one uploaded file and writes the outcome.

    Each step is guarded on its own: a failed OCR, summary or tagging call
    leaves that field empty and the file still ends up ``completed``. Only an
    error outside the guarded steps (typically the final write) marks the
    file ``failed``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        ocr: OCRService,
        documents: DocumentIntelligenceAgent,
    ):
        self.session_factory = session_factory
        self.ocr = ocr
        self.documents = documents

    async def process_file(self, file: UploadedFile, options: ProcessingOptions) -> None:
        try:
            ocr_text = ""
            summary = ""
            tags: List[str] = []

            if options.extract_text and is_ocr_supported(file.mime_type):
                try:
                    ocr_text = await self.ocr.extract_text(file.file_path, file.mime_type)
                except Exception as e:
                    logger.error(f"OCR failed for file {file.id}: {e}")

            # Without OCR text the file name is still worth summarizing and tagging
            text_for_ai = ocr_text or file.original_name

            if options.generate_summary and text_for_ai:
                try:
                    summary = await self.documents.summarize_document(text_for_ai, file.original_name)
                except Exception as e:
                    logger.error(f"Summary generation failed for file {file.id}: {e}")

            if options.auto_tag and text_for_ai:
                try:
                    tags = await self.documents.generate_tags(text_for_ai, file.original_name)
                except Exception as e:
                    logger.error(f"Tag generation failed for file {file.id}: {e}")

            await self._update_file(
                file.id,
                ocr_text=ocr_text,
                ai_summary=summary,
                tags=tags,
                processing_status=ProcessingStatus.COMPLETED.value,
            )
            logger.info(f"File processed successfully: {file.original_name} (id={file.id})")
        except Exception as e:
            logger.error(f"File processing failed for file {file.id}: {e}")
            await self._update_file(file.id, processing_status=ProcessingStatus.FAILED.value)

    async def _update_file(self, file_id: int, **values: Any) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(UploadedFile).where(UploadedFile.id == file_id).values(**values)
            )
            await session.commit()
