"""Tests for directory walking and pre-scan counting."""

from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pagecounter.errors import ScanCancelledError
from pagecounter.models import ScanOptions, ScanProgress
from pagecounter.utils.files import count_scan_paths, iter_scan_paths


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """root/{a.txt,b.PDF} root/sub/{c.txt,d.docx} root/sub/deep/e.txt"""
    root = tmp_path / "root"
    deep = root / "sub" / "deep"
    deep.mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "b.PDF").write_text("b")
    (root / "sub" / "c.txt").write_text("c")
    (root / "sub" / "d.docx").write_text("d")
    (deep / "e.txt").write_text("e")
    return root


def _names(paths: list[Path]) -> list[str]:
    return [path.name for path in paths]


class TestIterScanPaths:
    """Test iter_scan_paths function."""

    def test_recursive(self, tree: Path) -> None:
        """Should find every file, sorted per directory, parents first."""
        paths = list(iter_scan_paths(ScanOptions(root_path=tree)))

        assert _names(paths) == ["a.txt", "b.PDF", "c.txt", "d.docx", "e.txt"]

    def test_no_subfolders(self, tree: Path) -> None:
        """Should list the root directory only."""
        paths = list(iter_scan_paths(ScanOptions(root_path=tree, include_subfolders=False)))

        assert _names(paths) == ["a.txt", "b.PDF"]

    def test_max_depth_zero(self, tree: Path) -> None:
        paths = list(iter_scan_paths(ScanOptions(root_path=tree, max_depth=0)))

        assert _names(paths) == ["a.txt", "b.PDF"]

    def test_max_depth_one(self, tree: Path) -> None:
        paths = list(iter_scan_paths(ScanOptions(root_path=tree, max_depth=1)))

        assert _names(paths) == ["a.txt", "b.PDF", "c.txt", "d.docx"]

    def test_file_type_filter_case_insensitive(self, tree: Path) -> None:
        """Should compare extensions case-insensitively without the dot."""
        paths = list(iter_scan_paths(ScanOptions(root_path=tree, file_types=(".pdf",))))

        assert _names(paths) == ["b.PDF"]

    def test_filters_combined(self, tree: Path) -> None:
        options = ScanOptions(root_path=tree, max_depth=1, file_types=("txt",))

        assert _names(list(iter_scan_paths(options))) == ["a.txt", "c.txt"]

    def test_missing_root(self, tmp_path: Path) -> None:
        """Should yield nothing for a root that does not exist."""
        assert list(iter_scan_paths(ScanOptions(root_path=tmp_path / "missing"))) == []

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("x")

        assert list(iter_scan_paths(ScanOptions(root_path=path))) == []

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert list(iter_scan_paths(ScanOptions(root_path=tmp_path))) == []

    def test_lazy(self, tree: Path) -> None:
        """Should produce files one at a time."""
        iterator = iter_scan_paths(ScanOptions(root_path=tree))

        assert next(iterator).name == "a.txt"

    def test_vanished_file_skipped(self, tree: Path) -> None:
        """Files removed after listing are skipped silently."""
        iterator = iter_scan_paths(ScanOptions(root_path=tree, include_subfolders=False))
        first = next(iterator)
        (tree / "b.PDF").unlink()

        assert first.name == "a.txt"
        assert list(iterator) == []


class TestCountScanPaths:
    """Test count_scan_paths function."""

    def test_counts_match_enumeration(self, tree: Path) -> None:
        """Should apply the same filters as the enumerator."""
        for options in (
            ScanOptions(root_path=tree),
            ScanOptions(root_path=tree, include_subfolders=False),
            ScanOptions(root_path=tree, max_depth=1, file_types=("txt",)),
        ):
            assert count_scan_paths(options) == len(list(iter_scan_paths(options)))

    def test_dangling_symlink_excluded_from_both(self, tmp_path: Path) -> None:
        """Entries that are not regular files are neither counted nor yielded."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "dangling.txt").symlink_to(tmp_path / "missing-target.txt")
        options = ScanOptions(root_path=tmp_path)

        assert count_scan_paths(options) == 1
        assert _names(list(iter_scan_paths(options))) == ["a.txt"]

    def test_missing_root(self, tmp_path: Path) -> None:
        assert count_scan_paths(ScanOptions(root_path=tmp_path / "missing")) == 0

    def test_progress_cadence(self, tmp_path: Path) -> None:
        """Should report discovery progress every N files with an unknown total."""
        for index in range(120):
            (tmp_path / f"f{index:03d}.txt").write_text("x")
        updates: list[ScanProgress] = []

        count = count_scan_paths(
            ScanOptions(root_path=tmp_path), progress=updates.append, report_every=50
        )

        assert count == 120
        assert [update.processed_count for update in updates] == [50, 100]
        assert all(update.is_enumerating for update in updates)
        assert all(update.total_count == 0 for update in updates)
        assert updates[0].status_message == "Discovering files... 50 found"

    def test_cancelled(self, tree: Path) -> None:
        """Should raise instead of returning a partial count."""
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(ScanCancelledError):
            count_scan_paths(ScanOptions(root_path=tree), cancel=cancel)

    @patch("pagecounter.utils.files.LOGGER")
    @patch("pagecounter.utils.files._walk_candidates")
    def test_enumeration_error_returns_zero(
        self, mock_walk: MagicMock, mock_logger: MagicMock, tree: Path
    ) -> None:
        """Should log and report zero files on unexpected errors."""
        mock_walk.side_effect = PermissionError("denied")

        assert count_scan_paths(ScanOptions(root_path=tree)) == 0
        assert mock_logger.error.called
