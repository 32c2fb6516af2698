"""Window-size validation, zero-padding and frame bookkeeping."""

from __future__ import annotations

import numpy as np

from .errors import SampleBufferError, WindowSizeError


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def validate_window_size(window_size: int) -> int:
    """Return ``window_size`` as int or raise WindowSizeError."""
    if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
        raise WindowSizeError(f"window size must be an integer, got {window_size!r}")
    W = int(window_size)
    if W <= 0:
        raise WindowSizeError(f"window size must be positive, got {W}")
    if not is_power_of_two(W):
        raise WindowSizeError(f"window size must be a power of two, got {W}")
    return W


def validate_samples(samples) -> np.ndarray:
    """Coerce the sample buffer to a 1-D float64 array."""
    if np.iscomplexobj(samples):
        raise SampleBufferError("samples must be real-valued, got complex input")
    try:
        x = np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise SampleBufferError(f"samples must be numeric: {exc}") from exc
    if x.ndim != 1:
        raise SampleBufferError(f"samples must be 1-D, got shape {x.shape}")
    if not np.all(np.isfinite(x)):
        raise SampleBufferError("samples contain non-finite values")
    return x


def hop_size(window_size: int) -> int:
    """Hop between consecutive windows (50% overlap)."""
    return window_size // 2


def padded_length(n_samples: int, window_size: int) -> int:
    """Smallest multiple of ``window_size`` that holds ``n_samples``."""
    return -(-n_samples // window_size) * window_size


def frame_count(buffer_length: int, window_size: int) -> int:
    """Number of half-overlapping windows that fit in the padded buffer."""
    return max(0, 2 * (buffer_length // window_size) - 1)


def pad_to_window_multiple(samples, window_size: int) -> np.ndarray:
    """Zero-pad real samples to a multiple of the window size as complex values.

    Parameters
    ----------
    samples : array-like
        Real-valued input signal of length N.
    window_size : int
        Window size W.

    Returns
    -------
    np.ndarray
        complex128 array of length ``ceil(N/W)*W``; entries at index >= N are 0.
    """
    W = validate_window_size(window_size)
    x = validate_samples(samples)
    padded = np.zeros(padded_length(len(x), W), dtype=np.complex128)
    padded.real[: len(x)] = x
    return padded
