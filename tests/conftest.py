from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "in").mkdir(parents=True)
    (root / "data" / "out").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so signal-based tests are reproducible."""
    return np.random.default_rng(1234)


def write_wav(path: Path, samples: np.ndarray, sr: int = 22050) -> None:
    """Write mono 16-bit PCM so librosa can load it."""
    buf = np.clip(samples, -1.0, 1.0)
    buf = (buf * 32767).astype(np.int16)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sr)
        w.writeframes(buf.tobytes())


@pytest.fixture
def wav_writer():
    """Return the mono WAV writer helper."""
    return write_wav
