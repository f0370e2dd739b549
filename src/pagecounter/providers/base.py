"""Provider protocol shared by every page count estimator."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pagecounter.models import EstimationSettings, PageCountResult, file_extension
from pagecounter.utils.text import ceil_pages


class PageCountProvider(Protocol):
    """Protocol implemented by page count providers."""

    name: str
    supported_extensions: tuple[str, ...]

    def can_handle(self, path: Path) -> bool:
        ...

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        ...


class ExtensionProvider:
    """Base for providers selected purely by file extension."""

    name = "base"
    supported_extensions: tuple[str, ...] = ()

    def can_handle(self, path: Path) -> bool:
        """Match the lowercase, dotless extension against the supported set."""
        return file_extension(path) in self.supported_extensions

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        raise NotImplementedError


def size_based_estimate(path: Path, bytes_per_page: int, label: str) -> PageCountResult:
    """Estimate pages for a legacy binary format from its size on disk."""
    size = path.stat().st_size
    pages = max(1, ceil_pages(size, bytes_per_page))
    return PageCountResult.successful(
        pages,
        f"OK - estimated pages based on file size ({size} bytes); legacy {label} format",
    )
