"""
OCR service - text extraction from scanned images and PDFs (Tesseract + pdfplumber)
"""
import asyncio
import logging
from typing import Optional

import pdfplumber
import pytesseract
from PIL import Image

from backend.config import Settings, get_settings

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/tiff",
    "application/pdf",
})

PDF_RENDER_RESOLUTION = 300


class ExtractionError(Exception):
    """Raised when text could not be extracted from a stored file"""
    pass


def is_ocr_supported(mime_type: Optional[str]) -> bool:
    return mime_type in SUPPORTED_MIME_TYPES


class OCRService:
    """
    Extracts plain text from a stored file.

    Tesseract and pdfplumber are blocking, so each extraction runs in a worker
    thread to keep the event loop free for request handling.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.language = settings.OCR_LANGUAGE
        self.max_pdf_pages = settings.OCR_MAX_PDF_PAGES

    async def extract_text(self, file_path: str, mime_type: str) -> str:
        """Return the trimmed text of the file, raising ExtractionError on failure"""
        if not is_ocr_supported(mime_type):
            raise ExtractionError(f"OCR is not supported for media type '{mime_type}'")

        try:
            if mime_type == "application/pdf":
                text = await asyncio.to_thread(self._extract_pdf, file_path)
            else:
                text = await asyncio.to_thread(self._extract_image, file_path)
        except Exception as e:
            logger.error(f"OCR processing error for {file_path}: {e}")
            raise ExtractionError("Failed to extract text from document") from e

        return text.strip()

    def _extract_image(self, file_path: str) -> str:
        with Image.open(file_path) as image:
            return pytesseract.image_to_string(image, lang=self.language)

    def _extract_pdf(self, file_path: str) -> str:
        """Use the embedded text layer; OCR only the pages that have none"""
        text_parts = []
        with pdfplumber.open(file_path) as pdf:
            for page in pdf.pages[:self.max_pdf_pages]:
                page_text = page.extract_text() or ""
                if not page_text.strip():
                    rendered = page.to_image(resolution=PDF_RENDER_RESOLUTION).original
                    page_text = pytesseract.image_to_string(rendered, lang=self.language)
                if page_text.strip():
                    text_parts.append(page_text.strip())
        return "\n\n".join(text_parts)
