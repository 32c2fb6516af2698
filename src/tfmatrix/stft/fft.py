"""FFT engines.

All engines share the signature ``fft(x, outer_size, twiddles)`` so the
driver can swap them freely. Only the recursive engine reads the table.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import scipy.fft

FFTFunc = Callable[[np.ndarray, int, np.ndarray], np.ndarray]


def fft_recursive(x: np.ndarray, outer_size: int, twiddles: np.ndarray) -> np.ndarray:
    """Radix-2 decimation-in-time FFT.

    Parameters
    ----------
    x : np.ndarray
        Complex input of length L (power of two, L divides ``outer_size``).
    outer_size : int
        Size W of the outermost transform ``twiddles`` was built for.
    twiddles : np.ndarray
        Table with ``twiddles[k] = exp(-2*pi*i*k/W)``.

    Notes
    -----
    At depth L the needed root of unity is the (W/L)-th power of the base
    root, so ``twiddles[k * W / L]`` serves every recursion level from
    one table.
    """
    x = np.asarray(x, dtype=np.complex128)
    L = len(x)
    if L == 1:
        return x.copy()
    even = fft_recursive(x[0::2], outer_size, twiddles)
    odd = fft_recursive(x[1::2], outer_size, twiddles)
    k = np.arange(L)
    # E[k mod L/2] + O[k mod L/2] * w[k*W/L]
    return np.tile(even, 2) + np.tile(odd, 2) * twiddles[k * (outer_size // L)]


def fft_numpy(x: np.ndarray, outer_size: int, twiddles: np.ndarray) -> np.ndarray:
    """numpy.fft backend; ignores the twiddle table."""
    return np.fft.fft(np.asarray(x, dtype=np.complex128))


def fft_scipy(x: np.ndarray, outer_size: int, twiddles: np.ndarray) -> np.ndarray:
    """scipy.fft backend; ignores the twiddle table."""
    return scipy.fft.fft(np.asarray(x, dtype=np.complex128))


FFT_BACKENDS: dict[str, FFTFunc] = {
    "recursive": fft_recursive,
    "numpy": fft_numpy,
    "scipy": fft_scipy,
}


def get_fft_backend(name: str) -> FFTFunc:
    """Look up an FFT engine by name."""
    try:
        return FFT_BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown FFT backend: {name}. Use one of: {sorted(FFT_BACKENDS)}"
        ) from None
