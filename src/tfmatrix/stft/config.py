"""Defaults for the STFT core."""

import numpy as np

DEFAULT_WINDOW_SIZE = 2048
DEFAULT_BACKEND = "recursive"

# Emit a progress event every N finished windows
PROGRESS_EVERY = 100

OUTPUT_DTYPE = np.float64
