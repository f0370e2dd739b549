"""PDF page counts.

Uses PyMuPDF (fitz) to read the page tree directly; there is no size-based
fallback because a PDF's page count is either known or unknown.
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

from pagecounter.models import EstimationSettings, PageCountResult
from pagecounter.providers.base import ExtensionProvider

LOGGER = logging.getLogger(__name__)

PDF_EXTENSIONS = ("pdf",)


def get_pdf_page_count(path: Path) -> int:
    """Open a PDF and return the number of pages in its page tree."""
    doc = fitz.open(path)
    try:
        return len(doc)
    finally:
        doc.close()


class PdfPageCountProvider(ExtensionProvider):
    name = "pdf"
    supported_extensions = PDF_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        try:
            page_count = get_pdf_page_count(path)
        except Exception as exc:
            LOGGER.warning("Failed to read PDF %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read PDF; exception: {exc}")

        LOGGER.debug("PDF %s has %d pages", path.name, page_count)
        return PageCountResult.successful(page_count, "OK - PDF pages from library")
