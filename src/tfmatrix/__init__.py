"""
tfmatrix core package.

Provides:
- The STFT magnitude core (`tfmatrix.stft`): twiddle table, framer,
  recursive FFT, parallel window driver and normalizer.
- A batch pipeline that turns raw audio into `.npy` time-frequency
  matrices (`tfmatrix.pipeline`).
- A minimal Typer-based CLI (`tfmatrix.cli`).

Configuration:
- Shared, project-wide filesystem anchors live in `tfmatrix.global_config`.
- The STFT core keeps its own defaults in `tfmatrix.stft.config`.
"""
