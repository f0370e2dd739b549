"""Presentation page counts: one page per slide."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from pagecounter.models import EstimationSettings, PageCountResult, file_extension
from pagecounter.providers.base import ExtensionProvider, size_based_estimate
from pagecounter.utils.ooxml import slide_count

LOGGER = logging.getLogger(__name__)

PRESENTATION_EXTENSIONS = ("ppt", "pptx")
PPT_BYTES_PER_PAGE = 51200


class PresentationPageCountProvider(ExtensionProvider):
    name = "presentation"
    supported_extensions = PRESENTATION_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        extension = file_extension(path)
        if extension == "pptx":
            return self._pptx_page_count(path)
        if extension == "ppt":
            return self._ppt_page_count(path)
        return PageCountResult.unsupported()

    def _pptx_page_count(self, path: Path) -> PageCountResult:
        try:
            with zipfile.ZipFile(path) as package:
                slides = slide_count(package)
        except Exception as exc:
            LOGGER.warning("Failed to read PPTX %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read PPTX; exception: {exc}")

        if slides is None:
            return PageCountResult.successful(
                1, "OK - PPTX treated as 1 page; slides could not be counted"
            )

        LOGGER.debug("PPTX file %s has %d slides", path.name, slides)
        return PageCountResult.successful(
            max(1, slides), f"OK - {slides} slide(s) from presentation"
        )

    def _ppt_page_count(self, path: Path) -> PageCountResult:
        try:
            result = size_based_estimate(path, PPT_BYTES_PER_PAGE, "PPT")
        except OSError as exc:
            LOGGER.warning("Failed to process PPT %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to process PPT; exception: {exc}")
        LOGGER.debug("PPT file %s estimated at %d slides", path.name, result.page_count)
        return result
