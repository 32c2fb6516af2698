"""STFT-specific exception types."""

from __future__ import annotations


class STFTError(Exception):
    """Base exception for time-frequency transform errors."""


class WindowSizeError(STFTError, ValueError):
    """Raised when the window size is not a positive power of two."""


class SampleBufferError(STFTError, ValueError):
    """Raised when the sample buffer is not a finite 1-D signal."""


class WindowTaskError(STFTError):
    """Raised when processing a single window fails.

    The run is aborted as a whole: a missing column would break the
    fixed (W/2, F) shape of the output matrix.
    """

    def __init__(self, index: int, message: str | None = None) -> None:
        self.index = index
        super().__init__(message or f"Window {index} failed")
