from __future__ import annotations

import logging
from io import BytesIO

from resume_tailor.core.errors import PdfExtractionError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


def extract_pdf_text(content: bytes) -> str:
    if not content:
        raise PdfExtractionError("Failed to extract text from PDF: the uploaded file is empty.")
    if not content.lstrip()[:5].startswith(PDF_MAGIC):
        raise PdfExtractionError("Failed to extract text from PDF: the uploaded file is not a PDF.")

    from pypdf import PdfReader

    try:
        reader = PdfReader(BytesIO(content))
        page_chunks: list[str] = []
        for page in reader.pages:
            page_text = page.extract_text() or ""
            if page_text.strip():
                page_chunks.append(page_text)
    except Exception as exc:  # noqa: BLE001 - pypdf raises a wide range of errors on corrupt files
        logger.warning("pdf_extract_failed bytes=%s: %s", len(content), exc)
        raise PdfExtractionError(f"Failed to extract text from PDF: {exc}") from exc

    text = "\n\n".join(page_chunks)
    logger.debug("pdf_extract_ok pages=%s chars=%s", len(page_chunks), len(text))
    return text
