"""Word-family page counts: docx metadata or text length, doc size, rtf text."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from pagecounter.models import (
    DEFAULT_CHARS_PER_PAGE,
    EstimationSettings,
    PageCountResult,
    file_extension,
)
from pagecounter.providers.base import ExtensionProvider, size_based_estimate
from pagecounter.utils.ooxml import document_body_text, extended_page_count
from pagecounter.utils.text import ceil_pages, positive_or, read_text, strip_rtf_controls

LOGGER = logging.getLogger(__name__)

WORD_EXTENSIONS = ("doc", "docx", "rtf")
DOC_BYTES_PER_PAGE = 15360


def pages_from_characters(char_count: int, settings: EstimationSettings) -> tuple[int, int]:
    """Return ``(pages, chars_per_page)`` for a body of ``char_count`` characters."""
    chars_per_page = positive_or(settings.chars_per_page, DEFAULT_CHARS_PER_PAGE)
    return max(1, ceil_pages(char_count, chars_per_page)), chars_per_page


class WordPageCountProvider(ExtensionProvider):
    name = "word"
    supported_extensions = WORD_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        extension = file_extension(path)
        if extension == "docx":
            return self._docx_page_count(path, settings)
        if extension == "doc":
            return self._doc_page_count(path)
        if extension == "rtf":
            return self._rtf_page_count(path, settings)
        return PageCountResult.unsupported()

    def _docx_page_count(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        try:
            with zipfile.ZipFile(path) as package:
                page_count = extended_page_count(package)
                if page_count is not None and page_count > 0:
                    LOGGER.debug("DOCX file %s has %d pages from metadata", path.name, page_count)
                    return PageCountResult.successful(page_count, "OK - pages via document metadata")
                text = document_body_text(package)
        except Exception as exc:
            LOGGER.warning("Failed to read DOCX %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read DOCX; exception: {exc}")

        if text is None:
            return PageCountResult.successful(
                1, "OK - DOCX treated as 1 page; content could not be read"
            )

        pages, chars_per_page = pages_from_characters(len(text), settings)
        LOGGER.debug("DOCX file %s estimated at %d pages from content", path.name, pages)
        return PageCountResult.successful(
            pages,
            f"OK - estimated pages based on {chars_per_page} chars per page; "
            f"totalChars={len(text)}",
        )

    def _doc_page_count(self, path: Path) -> PageCountResult:
        try:
            result = size_based_estimate(path, DOC_BYTES_PER_PAGE, "DOC")
        except OSError as exc:
            LOGGER.warning("Failed to process DOC %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to process DOC; exception: {exc}")
        LOGGER.debug("DOC file %s estimated at %d pages", path.name, result.page_count)
        return result

    def _rtf_page_count(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        try:
            content = read_text(path)
        except OSError as exc:
            LOGGER.warning("Failed to read RTF %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read RTF; exception: {exc}")

        char_count = len(strip_rtf_controls(content))
        pages, chars_per_page = pages_from_characters(char_count, settings)
        LOGGER.debug("RTF file %s estimated at %d pages from content", path.name, pages)
        return PageCountResult.successful(
            pages,
            f"OK - estimated pages based on {chars_per_page} chars per page; "
            f"approxChars={char_count}",
        )
