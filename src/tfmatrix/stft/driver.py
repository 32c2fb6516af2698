"""Parallel per-window transform and magnitude extraction."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from .config import OUTPUT_DTYPE
from .errors import WindowTaskError
from .fft import FFTFunc, fft_recursive
from .framing import frame_count, hop_size, validate_window_size
from .observer import STFTObserver

logger = logging.getLogger(__name__)


def _transform_window(
    buffer: np.ndarray,
    index: int,
    window_size: int,
    twiddles: np.ndarray,
    fft: FFTFunc,
    out: np.ndarray,
) -> float:
    """Transform window ``index`` into column ``index`` of ``out``.

    Returns the largest magnitude in the column (0.0 when W == 1 keeps no bins).
    """
    offset = index * hop_size(window_size)
    frame = buffer[offset : offset + window_size].copy()  # private scratch
    spectrum = fft(frame, window_size, twiddles)
    magnitudes = np.abs(spectrum[: window_size // 2])
    out[:, index] = magnitudes
    return float(magnitudes.max()) if magnitudes.size else 0.0


def compute_raw_stft(
    buffer: np.ndarray,
    window_size: int,
    twiddles: np.ndarray,
    *,
    fft: FFTFunc = fft_recursive,
    max_workers: int | None = None,
    observer: STFTObserver | None = None,
) -> tuple[np.ndarray, float]:
    """Compute the un-normalized magnitude matrix and its global maximum.

    Parameters
    ----------
    buffer : np.ndarray
        Zero-padded complex buffer, length a multiple of ``window_size``.
    window_size : int
        Window size W; hop is W/2.
    twiddles : np.ndarray
        Twiddle table for W, shared read-only by every task.
    fft : callable
        FFT engine with signature ``fft(x, outer_size, twiddles)``.
    max_workers : int or None
        Thread pool size; None lets the executor choose.
    observer : STFTObserver or None
        Receives progress and timing events.

    Returns
    -------
    tuple[np.ndarray, float]
        Matrix of shape (W/2, F) and the largest magnitude observed.

    Notes
    -----
    The matrix is column-major, so window ``ii`` owns the contiguous block
    backing column ``ii`` and no two tasks write the same cells. Each task
    returns its own maximum; the maxima are folded only after every
    future has completed.
    """
    W = validate_window_size(window_size)
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    if len(buffer) % W != 0:
        raise ValueError(f"buffer length {len(buffer)} is not a multiple of {W}")

    n_frames = frame_count(len(buffer), W)
    out = np.zeros((W // 2, n_frames), dtype=OUTPUT_DTYPE, order="F")
    if n_frames == 0:
        return out, 0.0

    logger.debug("Processing %d overlapping windows (W=%d)", n_frames, W)
    start = time.perf_counter()
    maxima: list[float] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_transform_window, buffer, ii, W, twiddles, fft, out): ii
            for ii in range(n_frames)
        }
        for done, future in enumerate(as_completed(futures), start=1):
            ii = futures[future]
            try:
                maxima.append(future.result())
            except Exception as exc:
                for pending in futures:
                    pending.cancel()
                raise WindowTaskError(ii, f"Window {ii} failed: {exc}") from exc
            if observer is not None:
                observer.on_window(done, n_frames)

    global_max = max(maxima, default=0.0)
    if observer is not None:
        observer.on_phase("windows", time.perf_counter() - start)
    return out, global_max
