"""Provider registry with deterministic first-match dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pagecounter.config import DEFAULT_FFPROBE
from pagecounter.models import EstimationSettings, PageCountResult
from pagecounter.providers.base import PageCountProvider
from pagecounter.providers.image import ImagePageCountProvider
from pagecounter.providers.pdf import PdfPageCountProvider
from pagecounter.providers.presentation import PresentationPageCountProvider
from pagecounter.providers.spreadsheet import SpreadsheetPageCountProvider
from pagecounter.providers.text import TextPageCountProvider
from pagecounter.providers.video import VideoPageCountProvider
from pagecounter.providers.word import WordPageCountProvider

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderRegistry:
    """Ordered provider list; the first provider that can handle a file wins."""

    _providers: list[PageCountProvider] = field(default_factory=list)

    @classmethod
    def default(cls, *, ffprobe_binary: str = DEFAULT_FFPROBE) -> "ProviderRegistry":
        """Registry with every built-in provider in its fixed dispatch order."""
        registry = cls()
        registry.register(PdfPageCountProvider())
        registry.register(TextPageCountProvider())
        registry.register(ImagePageCountProvider())
        registry.register(VideoPageCountProvider(ffprobe_binary=ffprobe_binary))
        registry.register(SpreadsheetPageCountProvider())
        registry.register(WordPageCountProvider())
        registry.register(PresentationPageCountProvider())
        return registry

    def register(self, provider: PageCountProvider) -> None:
        """Register a provider in deterministic insertion order."""
        self._providers.append(provider)

    @property
    def providers(self) -> tuple[PageCountProvider, ...]:
        return tuple(self._providers)

    def names(self) -> tuple[str, ...]:
        return tuple(provider.name for provider in self._providers)

    def supported_extensions(self) -> tuple[str, ...]:
        """Every extension some provider accepts, in registration order."""
        seen: dict[str, None] = {}
        for provider in self._providers:
            for extension in provider.supported_extensions:
                seen.setdefault(extension, None)
        return tuple(seen)

    def select(self, path: Path) -> PageCountProvider | None:
        for provider in self._providers:
            if provider.can_handle(path):
                return provider
        return None

    def dispatch(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        """Estimate ``path`` with the first matching provider; never raises."""
        try:
            provider = self.select(path)
        except Exception as exc:
            LOGGER.warning("Provider selection failed for %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: provider failed; exception: {exc}")

        if provider is None:
            LOGGER.debug("No provider found for file type: %s", path.suffix)
            return PageCountResult.unsupported()

        try:
            return provider.estimate(path, settings)
        except Exception as exc:
            LOGGER.warning("Provider %s failed for %s: %s", provider.name, path.name, exc)
            return PageCountResult.failed(f"Error: provider failed; exception: {exc}")
