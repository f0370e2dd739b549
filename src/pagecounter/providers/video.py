"""Video files count as one page, with the runtime recorded in the notes."""

from __future__ import annotations

import logging
import math
import subprocess
from pathlib import Path

from pagecounter.config import DEFAULT_FFPROBE
from pagecounter.models import EstimationSettings, PageCountResult
from pagecounter.providers.base import ExtensionProvider
from pagecounter.utils.text import format_duration

LOGGER = logging.getLogger(__name__)

VIDEO_EXTENSIONS = ("mov", "mp4", "avi", "wmv", "mkv", "flv", "webm")
FFPROBE_TIMEOUT_SECONDS = 30


class VideoPageCountProvider(ExtensionProvider):
    name = "video"
    supported_extensions = VIDEO_EXTENSIONS

    def __init__(self, ffprobe_binary: str = DEFAULT_FFPROBE) -> None:
        self.ffprobe_binary = ffprobe_binary

    def probe_duration(self, path: Path) -> float | None:
        """Return the container duration in seconds, or None when ffprobe has none."""
        cmd = [
            self.ffprobe_binary,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]
        completed = subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            timeout=FFPROBE_TIMEOUT_SECONDS,
        )
        output = completed.stdout.strip()
        if not output or output == "N/A":
            return None
        return float(output.splitlines()[0])

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        try:
            duration = self.probe_duration(path)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or str(exc)
            return self._unknown_runtime(path, detail)
        except (OSError, ValueError, subprocess.SubprocessError) as exc:
            return self._unknown_runtime(path, str(exc))

        if duration is not None and math.isfinite(duration) and duration > 0:
            formatted = format_duration(duration)
            LOGGER.debug("Video file %s has runtime %s", path.name, formatted)
            return PageCountResult.successful(
                1, f"Runtime: {formatted} (hh:mm:ss); treated as 1 page"
            )

        LOGGER.debug("Video file %s has unknown runtime", path.name)
        return PageCountResult.successful(
            1, "Runtime unknown; treated as 1 page; duration metadata not available"
        )

    def _unknown_runtime(self, path: Path, detail: str) -> PageCountResult:
        LOGGER.warning("Failed to read video metadata for %s: %s", path.name, detail)
        return PageCountResult.successful(
            1, f"Runtime unknown; treated as 1 page; failed to read metadata: {detail}"
        )
