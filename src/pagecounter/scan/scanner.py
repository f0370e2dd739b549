"""Two-phase scan pipeline: discover the files, then estimate them one by one."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pagecounter.config import AppConfig
from pagecounter.errors import ScanCancelledError
from pagecounter.models import (
    EstimationSettings,
    FileMetadata,
    PageCountResult,
    ScanOptions,
    ScanProgress,
    ScanReport,
    ScanResult,
    ScanState,
)
from pagecounter.providers.registry import ProviderRegistry
from pagecounter.utils.files import ProgressCallback, count_scan_paths, iter_scan_paths

LOGGER = logging.getLogger(__name__)


def _safe_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


class PageCountScanner:
    """Coordinates discovery, page estimation and progress for a scan."""

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        settings: EstimationSettings | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ProviderRegistry.default()
        self.settings = settings if settings is not None else EstimationSettings()

    @classmethod
    def from_config(cls, config: AppConfig) -> "PageCountScanner":
        registry = ProviderRegistry.default(ffprobe_binary=config.ffprobe_binary)
        return cls(registry, config.estimation_settings())

    def estimate_single(self, path: Path) -> PageCountResult:
        """Estimate one file with the same dispatch rules as a scan."""
        return self.registry.dispatch(Path(path), self.settings)

    def scan(
        self,
        options: ScanOptions,
        on_progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> ScanReport:
        """Scan ``options.root_path`` and return the finished report.

        Per-file problems become failed entries in the report. Cancellation
        returns the entries processed so far with ``was_cancelled`` set. Any
        other error marks the scan failed and propagates.
        """
        result = ScanResult(root_path=options.root_path)
        LOGGER.info("Starting scan of %s", options.root_path)

        def report(update: ScanProgress) -> None:
            self._report(on_progress, update)

        try:
            result.transition(ScanState.DISCOVERING)
            report(ScanProgress(is_enumerating=True, status_message="Discovering files..."))

            total = count_scan_paths(options, progress=report, cancel=cancel)
            result.total_files_found = total
            report(
                ScanProgress(
                    total_count=total,
                    status_message=f"Found {total} files. Starting scan...",
                )
            )

            result.transition(ScanState.PROCESSING)
            cancelled = False
            for path in iter_scan_paths(options):
                if cancel is not None and cancel.is_set():
                    cancelled = True
                    break

                result.record(self._process(path))
                report(
                    ScanProgress(
                        processed_count=result.files_processed,
                        total_count=total,
                        current_file=str(path),
                        status_message=f"Processing: {path.name}",
                    )
                )

            if cancelled:
                raise ScanCancelledError("Scan was cancelled")

            result.mark_completed()
            LOGGER.info(
                "Scan completed: %d files processed, %d errors",
                result.files_processed,
                result.files_with_errors,
            )
        except ScanCancelledError:
            result.mark_cancelled()
            LOGGER.info("Scan was cancelled after %d files", result.files_processed)
        except Exception:
            LOGGER.exception("Scan of %s failed", options.root_path)
            if not result.state.is_terminal:
                result.mark_failed()
            raise

        return result.snapshot()

    def _process(self, path: Path) -> FileMetadata:
        try:
            page_count = self.registry.dispatch(path, self.settings)
            return FileMetadata.from_result(path, path.stat().st_size, page_count)
        except Exception as exc:
            LOGGER.warning("Error processing file %s: %s", path, exc)
            return FileMetadata.from_result(
                path, _safe_size(path), PageCountResult.failed(f"Error: {exc}")
            )

    @staticmethod
    def _report(callback: ProgressCallback | None, update: ScanProgress) -> None:
        if callback is None:
            return
        try:
            callback(update)
        except Exception as exc:
            LOGGER.warning("Progress callback failed: %s", exc)
