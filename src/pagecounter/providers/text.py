"""Plain text page estimates based on lines per page."""

from __future__ import annotations

import logging
from pathlib import Path

from pagecounter.models import DEFAULT_LINES_PER_PAGE, EstimationSettings, PageCountResult
from pagecounter.providers.base import ExtensionProvider
from pagecounter.utils.text import ceil_pages, count_lines, positive_or, read_text

LOGGER = logging.getLogger(__name__)

TEXT_EXTENSIONS = (
    "txt", "log", "md", "json", "xml", "html", "htm", "css", "js", "cs", "py", "java",
)


class TextPageCountProvider(ExtensionProvider):
    name = "text"
    supported_extensions = TEXT_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        try:
            content = read_text(path)
        except OSError as exc:
            LOGGER.warning("Failed to read text file %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read text file; exception: {exc}")

        total_lines = count_lines(content)
        lines_per_page = positive_or(settings.lines_per_page, DEFAULT_LINES_PER_PAGE)
        page_count = ceil_pages(total_lines, lines_per_page)
        if page_count == 0 and content:
            page_count = 1

        LOGGER.debug(
            "Text file %s has %d lines, estimated %d pages", path.name, total_lines, page_count
        )
        return PageCountResult.successful(
            page_count,
            f"OK - estimated pages based on {lines_per_page} lines per page; "
            f"totalLines={total_lines}",
        )
