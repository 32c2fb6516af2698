"""Twiddle factor table shared by every FFT call for a given window size."""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from .framing import validate_window_size


def compute_twiddles(window_size: int) -> np.ndarray:
    """Compute the W complex roots of unity ``exp(-2*pi*i*k/W)``.

    Parameters
    ----------
    window_size : int
        Outer transform size W (positive power of two).

    Returns
    -------
    np.ndarray
        Read-only complex128 array of length W.
    """
    W = validate_window_size(window_size)
    k = np.arange(W)
    twiddles = np.exp(-2j * np.pi * k / W)
    twiddles.setflags(write=False)
    return twiddles


@lru_cache(maxsize=16)
def get_twiddles(window_size: int) -> np.ndarray:
    """Return the memoized twiddle table for ``window_size``."""
    return compute_twiddles(window_size)
