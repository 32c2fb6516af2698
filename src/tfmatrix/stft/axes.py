"""Physical axes for a time-frequency matrix."""

from __future__ import annotations

import numpy as np

from .framing import hop_size, validate_window_size


def bin_frequencies(window_size: int, sample_rate: float) -> np.ndarray:
    """Center frequency in Hz of each retained bin (rows 0 .. W/2-1)."""
    W = validate_window_size(window_size)
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    return np.arange(W // 2) * float(sample_rate) / W


def frame_times(n_frames: int, window_size: int, sample_rate: float) -> np.ndarray:
    """Start time in seconds of each window (columns 0 .. F-1)."""
    W = validate_window_size(window_size)
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    return np.arange(max(0, n_frames)) * hop_size(W) / float(sample_rate)
