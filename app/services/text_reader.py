"""
Raw text for the extractor.

PDFs are read with PyMuPDF. Images have no text layer and yield an empty
string; the extractor then finds nothing and verification skips its checks.
"""

import logging
from pathlib import Path

import pymupdf  # PyMuPDF for PDF handling

from app.core.errors import ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}


def read_pdf_text(file_path: str) -> str:
    try:
        doc = pymupdf.open(file_path)
    except (RuntimeError, ValueError) as e:
        logger.error(f"PDF extraction error for {file_path}: {e}")
        raise ValidationError("Failed to extract text from PDF") from e
    try:
        return "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def read_text(file_path: str) -> str:
    """Extract text from a stored upload."""
    file_ext = Path(file_path).suffix.lower()

    if file_ext == ".pdf":
        return read_pdf_text(file_path)
    if file_ext in IMAGE_EXTENSIONS:
        return ""

    logger.info(f"No text reader for {file_ext}, treating as empty")
    return ""
