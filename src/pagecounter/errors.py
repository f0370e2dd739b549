"""Exception types raised by the scan pipeline."""

from __future__ import annotations


class PageCounterError(Exception):
    """Base class for PageCounter errors."""


class ScanCancelledError(PageCounterError):
    """Raised when a caller-requested cancellation interrupts a scan phase."""


class ScanStateError(PageCounterError):
    """Raised when a scan aggregate is mutated after reaching a terminal state."""
