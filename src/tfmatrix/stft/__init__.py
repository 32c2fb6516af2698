"""Short-time Fourier magnitude computation package."""

from .axes import bin_frequencies, frame_times
from .driver import compute_raw_stft
from .errors import SampleBufferError, STFTError, WindowSizeError, WindowTaskError
from .fft import FFT_BACKENDS, fft_numpy, fft_recursive, fft_scipy, get_fft_backend
from .framing import frame_count, pad_to_window_multiple, padded_length, validate_window_size
from .normalize import normalize_by_max
from .observer import LoggingObserver, STFTObserver
from .orchestrator import TimeFrequencyResult, compute_time_frequency
from .twiddle import compute_twiddles, get_twiddles

__all__ = [
    "FFT_BACKENDS",
    "LoggingObserver",
    "SampleBufferError",
    "STFTError",
    "STFTObserver",
    "TimeFrequencyResult",
    "WindowSizeError",
    "WindowTaskError",
    "bin_frequencies",
    "compute_raw_stft",
    "compute_time_frequency",
    "compute_twiddles",
    "fft_numpy",
    "fft_recursive",
    "fft_scipy",
    "frame_count",
    "frame_times",
    "get_fft_backend",
    "get_twiddles",
    "normalize_by_max",
    "pad_to_window_multiple",
    "padded_length",
    "validate_window_size",
]
