from __future__ import annotations

import io
import logging
from pathlib import Path

from src.utils.text import clean_html, collapse_whitespace

logger = logging.getLogger(__name__)


class UnsupportedResumeError(ValueError):
    pass


def parse_pdf(file_bytes: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(io.BytesIO(file_bytes))
    pages = [page.extract_text() or "" for page in reader.pages]
    return collapse_whitespace("\n".join(pages))


def parse_docx(file_bytes: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(file_bytes))
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    return collapse_whitespace("\n".join(paragraphs))


def parse_text(file_bytes: bytes) -> str:
    return collapse_whitespace(file_bytes.decode("utf-8", errors="replace"))


def parse_html(file_bytes: bytes) -> str:
    return clean_html(file_bytes.decode("utf-8", errors="replace"))


PARSERS = {
    ".pdf": parse_pdf,
    ".docx": parse_docx,
    ".txt": parse_text,
    ".md": parse_text,
    ".html": parse_html,
    ".htm": parse_html,
}


def parse_resume(filename: str, file_bytes: bytes) -> str:
    ext = Path(filename).suffix.lower()
    parser = PARSERS.get(ext)
    if parser is None:
        raise UnsupportedResumeError(
            f"Unsupported file type: {ext or filename}. Use PDF, DOCX, TXT, MD, or HTML."
        )
    text = parser(file_bytes)
    logger.info("Parsed %s (%d chars)", filename, len(text))
    return text
