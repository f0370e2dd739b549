"""Images print as a single page."""

from __future__ import annotations

import logging
from pathlib import Path

from pagecounter.models import EstimationSettings, PageCountResult, file_extension
from pagecounter.providers.base import ExtensionProvider

LOGGER = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "bmp", "tif", "tiff", "webp", "ico")
TIFF_EXTENSIONS = ("tif", "tiff")


class ImagePageCountProvider(ExtensionProvider):
    name = "image"
    supported_extensions = IMAGE_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        if file_extension(path) in TIFF_EXTENSIONS:
            return self._tiff_page_count(path)

        LOGGER.debug("Image file %s treated as 1 page", path.name)
        return PageCountResult.successful(1, "OK - image treated as 1 page for printing")

    def _tiff_page_count(self, path: Path) -> PageCountResult:
        # TODO: count TIFF frames (IFD chain) instead of assuming a single page.
        LOGGER.debug("TIFF file %s treated as 1 page", path.name)
        return PageCountResult.successful(1, "OK - TIFF image treated as 1 page for printing")
