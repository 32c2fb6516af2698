"""Public time-frequency entry point.

Validates inputs, then runs twiddle table -> framer -> parallel driver ->
normalizer in that order.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import numpy as np

from .config import DEFAULT_BACKEND
from .driver import compute_raw_stft
from .fft import get_fft_backend
from .framing import hop_size, pad_to_window_multiple, validate_samples, validate_window_size
from .normalize import normalize_by_max
from .observer import STFTObserver
from .twiddle import get_twiddles


@dataclass(frozen=True)
class TimeFrequencyResult:
    """Magnitude matrix of shape (W/2, F) plus the parameters that produced it."""

    magnitudes: np.ndarray
    window_size: int
    n_samples: int
    global_max: float
    backend: str = DEFAULT_BACKEND

    @property
    def hop_size(self) -> int:
        return hop_size(self.window_size)

    @property
    def n_bins(self) -> int:
        return self.magnitudes.shape[0]

    @property
    def n_frames(self) -> int:
        return self.magnitudes.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.magnitudes.shape


def compute_time_frequency(
    samples,
    window_size: int,
    *,
    backend: str = DEFAULT_BACKEND,
    max_workers: int | None = None,
    observer: STFTObserver | None = None,
    normalize: bool = True,
) -> TimeFrequencyResult:
    """Short-time Fourier magnitude matrix of a real signal.

    Parameters
    ----------
    samples : array-like
        Real-valued 1-D signal; may be empty.
    window_size : int
        Window size W (positive power of two); hop is W/2.
    backend : str
        FFT engine name: recursive, numpy or scipy.
    max_workers : int or None
        Thread pool size for the per-window phase.
    observer : STFTObserver or None
        Optional timing/progress hook.
    normalize : bool
        If True, scale the matrix to [0, 1] by its global maximum.

    Raises
    ------
    WindowSizeError
        If W is not a positive power of two. Raised before any work starts.
    SampleBufferError
        If samples is not a finite 1-D signal.
    WindowTaskError
        If any window fails; no partial matrix is returned.
    """
    W = validate_window_size(window_size)
    fft = get_fft_backend(backend)
    x = validate_samples(samples)
    total_start = time.perf_counter()

    start = time.perf_counter()
    twiddles = get_twiddles(W)
    if observer is not None:
        observer.on_phase("twiddle", time.perf_counter() - start)

    start = time.perf_counter()
    buffer = pad_to_window_multiple(x, W)
    if observer is not None:
        observer.on_phase("padding", time.perf_counter() - start)

    raw, global_max = compute_raw_stft(
        buffer, W, twiddles, fft=fft, max_workers=max_workers, observer=observer
    )

    if normalize:
        start = time.perf_counter()
        magnitudes = normalize_by_max(raw, global_max)
        if observer is not None:
            observer.on_phase("normalization", time.perf_counter() - start)
    else:
        magnitudes = raw

    if observer is not None:
        observer.on_phase("total", time.perf_counter() - total_start)

    return TimeFrequencyResult(
        magnitudes=magnitudes,
        window_size=W,
        n_samples=len(x),
        global_max=global_max,
        backend=backend,
    )
