"""Utility helpers for walking directory trees."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterator

from pagecounter.errors import ScanCancelledError
from pagecounter.models import ScanOptions, ScanProgress

LOGGER = logging.getLogger(__name__)

DISCOVERY_REPORT_EVERY = 50

ProgressCallback = Callable[[ScanProgress], None]


def _log_walk_error(error: OSError) -> None:
    LOGGER.debug("Skipping unreadable directory %s: %s", error.filename, error)


def _walk_candidates(options: ScanOptions) -> Iterator[Path]:
    """Yield every file under the root that passes the option filters."""
    root = options.root_path
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        directory = Path(dirpath)
        if not options.include_subfolders:
            dirnames[:] = []
        else:
            dirnames.sort()
            if options.max_depth is not None:
                # Children of this directory sit one level deeper than its files.
                depth = len(directory.relative_to(root).parts) + 1
                if depth > options.max_depth:
                    dirnames[:] = []
        for name in sorted(filenames):
            path = directory / name
            if options.accepts(path) and _is_regular_file(path):
                yield path


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as exc:
        LOGGER.debug("Cannot access file %s: %s", path, exc)
        return False


def iter_scan_paths(options: ScanOptions) -> Iterator[Path]:
    """Yield files matching the scan options, lazily and in sorted order.

    A missing root yields nothing. Files that vanish between listing and use
    are skipped. Callers check for cancellation between items.
    """
    if not options.root_path.is_dir():
        LOGGER.warning("Directory does not exist: %s", options.root_path)
        return

    yield from _walk_candidates(options)


def count_scan_paths(
    options: ScanOptions,
    *,
    progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
    report_every: int = DISCOVERY_REPORT_EVERY,
) -> int:
    """Count the files a scan will visit without keeping them around.

    Emits a discovery progress update every ``report_every`` files. Raises
    :class:`ScanCancelledError` when cancelled; any other enumeration error
    is logged and reported as zero files.
    """
    if not options.root_path.is_dir():
        LOGGER.warning("Directory does not exist: %s", options.root_path)
        return 0

    try:
        count = 0
        for _ in _walk_candidates(options):
            if cancel is not None and cancel.is_set():
                raise ScanCancelledError("File discovery was cancelled")
            count += 1
            if progress is not None and report_every > 0 and count % report_every == 0:
                progress(
                    ScanProgress(
                        processed_count=count,
                        total_count=0,
                        is_enumerating=True,
                        status_message=f"Discovering files... {count} found",
                    )
                )
    except ScanCancelledError:
        raise
    except Exception as exc:
        LOGGER.error("Error counting files in %s: %s", options.root_path, exc)
        return 0

    LOGGER.info("Found %d files in %s", count, options.root_path)
    return count
