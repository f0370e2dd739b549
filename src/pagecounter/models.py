"""Core PageCounter data models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path

from pagecounter.errors import ScanStateError

DEFAULT_CHARS_PER_PAGE = 1800
DEFAULT_LINES_PER_PAGE = 50
DEFAULT_ROWS_PER_PAGE = 50
DEFAULT_COLUMNS_PER_PAGE = 10

UNSUPPORTED_NOTE = "Unsupported file type for page counting"


def normalize_extension(value: str) -> str:
    """Return an extension lowercased and without its leading dot."""
    return value.strip().lstrip(".").lower()


def file_extension(path: Path) -> str:
    return normalize_extension(path.suffix)


def path_depth(path: Path) -> int:
    """Number of non-empty components in a path."""
    return len([part for part in path.parts if part.strip("/\\")])


class ExportFormat(str, Enum):
    XLSX = "xlsx"
    CSV = "csv"


@dataclass(slots=True, frozen=True)
class ScanOptions:
    """Immutable description of what a scan should visit."""

    root_path: Path
    include_subfolders: bool = True
    max_depth: int | None = None
    file_types: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_path", Path(self.root_path))
        if self.file_types is not None:
            file_types = (self.file_types,) if isinstance(self.file_types, str) else self.file_types
            normalized = tuple(
                ext for ext in (normalize_extension(item) for item in file_types) if ext
            )
            object.__setattr__(self, "file_types", normalized)

    def within_depth(self, path: Path) -> bool:
        if self.max_depth is None:
            return True
        return path_depth(path.parent) - path_depth(self.root_path) <= self.max_depth

    def matches_type(self, path: Path) -> bool:
        if not self.file_types:
            return True
        return file_extension(path) in self.file_types

    def accepts(self, path: Path) -> bool:
        """Depth and type filters, applied independently and conjunctively."""
        return self.within_depth(path) and self.matches_type(path)


@dataclass(slots=True, frozen=True)
class EstimationSettings:
    """Per-scan heuristic parameters passed to every provider call."""

    chars_per_page: int = DEFAULT_CHARS_PER_PAGE
    lines_per_page: int = DEFAULT_LINES_PER_PAGE
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    columns_per_page: int = DEFAULT_COLUMNS_PER_PAGE


@dataclass(slots=True, frozen=True)
class PageCountResult:
    """Outcome of estimating one file.

    ``page_count`` is set exactly when ``success`` is true, and ``notes``
    always describes the method used or the reason for failure.
    """

    page_count: int | None
    notes: str
    success: bool

    def __post_init__(self) -> None:
        if (self.page_count is not None) != self.success:
            raise ValueError("page_count must be set if and only if success is true")
        if not self.notes:
            raise ValueError("notes must not be empty")

    @classmethod
    def successful(cls, page_count: int, notes: str) -> "PageCountResult":
        return cls(page_count=page_count, notes=notes, success=True)

    @classmethod
    def failed(cls, notes: str) -> "PageCountResult":
        return cls(page_count=None, notes=notes, success=False)

    @classmethod
    def unsupported(cls) -> "PageCountResult":
        return cls.failed(UNSUPPORTED_NOTE)


@dataclass(slots=True, frozen=True)
class FileMetadata:
    """Exported record for a single processed file."""

    full_path: Path
    root_path: Path
    file_name: str
    file_size_bytes: int
    file_type: str
    page_count: int | None
    notes: str
    processed_successfully: bool

    @classmethod
    def from_result(cls, path: Path, size: int, result: PageCountResult) -> "FileMetadata":
        return cls(
            full_path=path,
            root_path=path.parent,
            file_name=path.name,
            file_size_bytes=size,
            file_type=file_extension(path),
            page_count=result.page_count,
            notes=result.notes,
            processed_successfully=result.success,
        )


@dataclass(slots=True, frozen=True)
class ScanProgress:
    """Progress update delivered to scan callers."""

    processed_count: int = 0
    total_count: int = 0
    current_file: str | None = None
    is_enumerating: bool = False
    status_message: str = ""

    @property
    def progress_percentage(self) -> float:
        if self.total_count > 0:
            return min(100.0, self.processed_count / self.total_count * 100)
        return 0.0


class ScanState(str, Enum):
    NOT_STARTED = "not_started"
    DISCOVERING = "discovering"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanState.COMPLETED, ScanState.CANCELLED, ScanState.FAILED)


@dataclass(slots=True, frozen=True)
class ScanSummary:
    """Compact description of a finished scan for history records."""

    scan_id: uuid.UUID
    timestamp: datetime
    root_path: Path
    total_files_processed: int
    files_with_errors: int
    export_path: Path | None
    export_format: ExportFormat
    is_complete: bool
    duration_seconds: float


@dataclass(slots=True, frozen=True)
class ScanReport:
    """Read-only view of a scan that reached a terminal state."""

    scan_id: uuid.UUID
    start_time: datetime
    end_time: datetime
    root_path: Path
    state: ScanState
    total_files_found: int
    files_processed: int
    files_with_errors: int
    was_cancelled: bool
    is_complete: bool
    files: tuple[FileMetadata, ...]

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def total_pages(self) -> int:
        return sum(item.page_count or 0 for item in self.files)

    def summary(
        self,
        *,
        export_path: Path | None = None,
        export_format: ExportFormat = ExportFormat.XLSX,
    ) -> ScanSummary:
        return ScanSummary(
            scan_id=self.scan_id,
            timestamp=self.start_time,
            root_path=self.root_path,
            total_files_processed=self.files_processed,
            files_with_errors=self.files_with_errors,
            export_path=export_path,
            export_format=export_format,
            is_complete=self.is_complete,
            duration_seconds=self.duration.total_seconds(),
        )


@dataclass(slots=True)
class ScanResult:
    """Mutable aggregate owned by the scanner until the scan is terminal."""

    root_path: Path
    scan_id: uuid.UUID = field(default_factory=uuid.uuid4)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None
    state: ScanState = ScanState.NOT_STARTED
    total_files_found: int = 0
    files_processed: int = 0
    files_with_errors: int = 0
    was_cancelled: bool = False
    is_complete: bool = False
    files: list[FileMetadata] = field(default_factory=list)

    @property
    def duration(self) -> timedelta:
        end = self.end_time if self.end_time is not None else datetime.now()
        return end - self.start_time

    def _ensure_open(self) -> None:
        if self.state.is_terminal:
            raise ScanStateError(f"Scan {self.scan_id} is already {self.state.value}")

    def transition(self, state: ScanState) -> None:
        self._ensure_open()
        self.state = state

    def record(self, metadata: FileMetadata) -> None:
        """Append a processed file and update the counters."""
        self._ensure_open()
        self.files.append(metadata)
        self.files_processed = len(self.files)
        if not metadata.processed_successfully:
            self.files_with_errors += 1

    def mark_completed(self) -> None:
        self._finish(ScanState.COMPLETED)
        self.is_complete = True

    def mark_cancelled(self) -> None:
        self._finish(ScanState.CANCELLED)
        self.was_cancelled = True

    def mark_failed(self) -> None:
        self._finish(ScanState.FAILED)

    def _finish(self, state: ScanState) -> None:
        self._ensure_open()
        self.state = state
        self.end_time = datetime.now()

    def snapshot(self) -> ScanReport:
        """Freeze the aggregate once the scan is terminal."""
        if not self.state.is_terminal or self.end_time is None:
            raise ScanStateError(f"Scan {self.scan_id} has not finished ({self.state.value})")
        return ScanReport(
            scan_id=self.scan_id,
            start_time=self.start_time,
            end_time=self.end_time,
            root_path=self.root_path,
            state=self.state,
            total_files_found=self.total_files_found,
            files_processed=self.files_processed,
            files_with_errors=self.files_with_errors,
            was_cancelled=self.was_cancelled,
            is_complete=self.is_complete,
            files=tuple(self.files),
        )
