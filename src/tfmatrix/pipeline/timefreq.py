"""Pipeline for computing time-frequency matrices from raw audio and writing .npy outputs."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import librosa
import numpy as np

from ..global_config import DERIVED_DIR, RAW_AUDIO_DIR
from ..stft import (
    FFT_BACKENDS,
    LoggingObserver,
    WindowSizeError,
    compute_time_frequency,
    validate_window_size,
)
from ..stft.config import DEFAULT_WINDOW_SIZE

logger = logging.getLogger(__name__)

TIMEFREQ_OUTPUT_DIR = DERIVED_DIR / "timefreq"

# Engine for batch runs and the CLI; the core default stays "recursive"
PIPELINE_DEFAULT_BACKEND = "numpy"


def _resolve_audio_files(files: list[Path] | None, raw_audio_dir: Path) -> list[Path]:
    """Return list of audio paths: explicit files if given, else all .wav in raw_audio_dir."""
    if files:
        return [Path(p).resolve() for p in files]
    if not raw_audio_dir.exists():
        return []
    return sorted(raw_audio_dir.glob("*.wav"))


def _track_name(audio_path: Path) -> str:
    """Stem of the audio file (no extension)."""
    return audio_path.stem


def _output_filename(track_name: str, backend: str, window_size: int) -> str:
    """Build filename: <track-name>_timefreq_<backend>_<W>.npy."""
    return f"{track_name}_timefreq_{backend}_{window_size}.npy"


def _config_failure(message: str) -> dict:
    return {
        "success": False,
        "total": 0,
        "succeeded": 0,
        "failed": 0,
        "skipped": 0,
        "message": message,
        "items": [],
        "failures": [],
    }


def run_timefreq(
    *,
    audio_files: list[Path] | None = None,
    output_dir: Path = TIMEFREQ_OUTPUT_DIR,
    raw_audio_dir: Path = RAW_AUDIO_DIR,
    window_size: int | None = None,
    backend: str = PIPELINE_DEFAULT_BACKEND,
    workers: int | None = None,
    dry_run: bool = False,
) -> dict:
    """Compute normalized time-frequency matrices for audio file(s) and write .npy to output_dir.

    If audio_files is None or empty, uses all .wav files in raw_audio_dir.
    Audio is loaded mono at its native sample rate. Output filename:
    <track-name>_timefreq_<backend>_<W>.npy, shape (W/2, F).

    Returns:
        Dict with success, total, succeeded, failed, skipped, elapsed_s, message, items, failures.
    """
    W = window_size if window_size is not None else DEFAULT_WINDOW_SIZE
    try:
        W = validate_window_size(W)
    except WindowSizeError as exc:
        return _config_failure(str(exc))
    if backend not in FFT_BACKENDS:
        return _config_failure(
            f"Unknown FFT backend: {backend}. Use one of: {sorted(FFT_BACKENDS)}"
        )
    if workers is not None and workers < 1:
        return _config_failure(f"workers must be >= 1, got {workers}")

    paths = _resolve_audio_files(audio_files, raw_audio_dir)
    if not paths:
        return {
            "success": True,
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "message": "No audio files to process.",
            "items": [],
            "failures": [],
        }

    output_dir = Path(output_dir)
    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    observer = LoggingObserver(logger, level=logging.INFO)
    start = time.perf_counter()
    succeeded = 0
    failed = 0
    items: list[dict] = []
    failures: list[dict] = []

    for audio_path in paths:
        out_name = _output_filename(_track_name(audio_path), backend, W)
        out_path = output_dir / out_name

        if not audio_path.exists():
            failed += 1
            failures.append({"item": str(audio_path), "reason": "File not found"})
            items.append({"file": str(audio_path), "status": "failed", "detail": "File not found"})
            continue

        try:
            y, sr = librosa.load(audio_path, sr=None, mono=True)
            logger.info("STFT of %s: %d samples, W=%d", audio_path.name, len(y), W)
            result = compute_time_frequency(
                y, W, backend=backend, max_workers=workers, observer=observer
            )
            if not dry_run:
                np.save(out_path, result.magnitudes, allow_pickle=False)
            succeeded += 1
            items.append({
                "file": audio_path.name,
                "output": out_name,
                "status": "success",
                "sample_rate_hz": int(sr),
                "num_samples": result.n_samples,
                "window_size": W,
                "hop_size": result.hop_size,
                "shape": result.shape,
                "dtype": str(result.magnitudes.dtype),
                "global_max": result.global_max,
            })
        except Exception as e:
            logger.exception("Time-frequency computation failed for %s", audio_path)
            failed += 1
            failures.append({"item": str(audio_path), "reason": str(e)})
            items.append({"file": audio_path.name, "status": "failed", "detail": str(e)})

    return {
        "success": failed == 0,
        "total": len(paths),
        "succeeded": succeeded,
        "failed": failed,
        "skipped": 0,
        "elapsed_s": time.perf_counter() - start,
        "message": f"Processed {len(paths)} file(s). Succeeded: {succeeded}, failed: {failed}."
        + (" [DRY RUN]" if dry_run else ""),
        "items": items,
        "failures": failures,
    }
