"""Text helpers shared by the page count heuristics."""

from __future__ import annotations

import math
import re
from pathlib import Path

RTF_CONTROL_PATTERN = re.compile(r"\\[a-z]+\d*\s?|\{|\}")


def read_text(path: Path) -> str:
    """Read a file as text, tolerating undecodable bytes.

    Line endings are kept as stored on disk.
    """
    with path.open("r", encoding="utf-8", errors="replace", newline="") as handle:
        return handle.read()


def count_lines(content: str) -> int:
    """Count newline-delimited segments; an empty string is one segment."""
    return content.count("\n") + 1


def count_raw_lines(path: Path) -> int:
    """Count physical lines as a line reader would see them."""
    count = 0
    with path.open("r", encoding="utf-8", errors="replace", newline=None) as handle:
        for _ in handle:
            count += 1
    return count


def strip_rtf_controls(content: str) -> str:
    """Remove RTF control words and group braces, leaving approximate body text."""
    return RTF_CONTROL_PATTERN.sub("", content)


def ceil_pages(amount: int, per_page: int) -> int:
    """Ceiling division of an amount by a per-page capacity."""
    if amount <= 0:
        return 0
    return math.ceil(amount / per_page)


def positive_or(value: int, default: int) -> int:
    return value if value > 0 else default


def format_duration(total_seconds: float) -> str:
    """Format a duration as HH:MM:SS, hours not wrapping at 24."""
    seconds = int(total_seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
