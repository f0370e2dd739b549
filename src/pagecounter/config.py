"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from pagecounter.models import (
    DEFAULT_CHARS_PER_PAGE,
    DEFAULT_COLUMNS_PER_PAGE,
    DEFAULT_LINES_PER_PAGE,
    DEFAULT_ROWS_PER_PAGE,
    EstimationSettings,
)

DEFAULT_FFPROBE = "ffprobe"


@dataclass(slots=True)
class AppConfig:
    # Not consumed by the scanner, which processes one file at a time.
    max_parallelism: int = field(default_factory=lambda: os.cpu_count() or 1)
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE
    lines_per_page: int = DEFAULT_LINES_PER_PAGE
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    columns_per_page: int = DEFAULT_COLUMNS_PER_PAGE
    include_subfolders: bool = True
    ffprobe_binary: str = DEFAULT_FFPROBE

    def estimation_settings(self) -> EstimationSettings:
        return EstimationSettings(
            chars_per_page=self.chars_per_page,
            lines_per_page=self.lines_per_page,
            rows_per_page=self.rows_per_page,
            columns_per_page=self.columns_per_page,
        )
