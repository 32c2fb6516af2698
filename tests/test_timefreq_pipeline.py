"""Tests for time-frequency pipeline and CLI behavior."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from typer.testing import CliRunner

from tfmatrix.cli.main import app
from tfmatrix.pipeline.timefreq import (
    PIPELINE_DEFAULT_BACKEND,
    _output_filename,
    _resolve_audio_files,
    _track_name,
    run_timefreq,
)

SR = 22050


def _tone(duration_sec: float = 0.5, freq: float = 440.0) -> np.ndarray:
    n = np.arange(int(SR * duration_sec))
    return 0.5 * np.sin(2 * np.pi * freq * n / SR)


class TestTimefreqHelpers:
    """Unit tests for pipeline helpers."""

    def test_track_name_from_path(self) -> None:
        assert _track_name(Path("/foo/bar/YTB-001.wav")) == "YTB-001"
        assert _track_name(Path("a.wav")) == "a"

    def test_output_filename_format(self) -> None:
        assert _output_filename("YTB-001", "recursive", 2048) == "YTB-001_timefreq_recursive_2048.npy"

    def test_resolve_audio_files_explicit(self, tmp_path: Path) -> None:
        a = tmp_path / "a.wav"
        a.touch()
        got = _resolve_audio_files([a], tmp_path)
        assert len(got) == 1
        assert got[0].name == "a.wav"

    def test_resolve_audio_files_default_folder(self, tmp_path: Path) -> None:
        (tmp_path / "one.wav").touch()
        (tmp_path / "two.wav").touch()
        (tmp_path / "notes.txt").touch()
        got = _resolve_audio_files(None, tmp_path)
        assert {p.name for p in got} == {"one.wav", "two.wav"}

    def test_resolve_audio_files_nonexistent_folder(self, tmp_path: Path) -> None:
        assert _resolve_audio_files(None, tmp_path / "missing") == []


class TestRunTimefreq:
    """Integration-style tests for run_timefreq (tmp paths)."""

    @pytest.mark.integration
    def test_writes_normalized_matrix(self, tmp_path: Path, wav_writer) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        out_dir = tmp_path / "timefreq"
        wav_writer(wav_dir / "TRACK01.wav", _tone(), SR)

        result = run_timefreq(
            audio_files=[wav_dir / "TRACK01.wav"],
            output_dir=out_dir,
            raw_audio_dir=wav_dir,
            window_size=256,
            workers=2,
        )

        assert result["success"] is True
        assert result["succeeded"] == 1
        out_file = out_dir / "TRACK01_timefreq_numpy_256.npy"
        assert out_file.exists()
        arr = np.load(out_file)
        # 11025 samples -> padded 11264 -> 44 blocks -> 87 windows
        assert arr.shape == (128, 87)
        assert arr.dtype == np.float64
        assert arr.max() == pytest.approx(1.0)
        assert arr.min() >= 0.0
        item = result["items"][0]
        assert item["sample_rate_hz"] == SR
        assert item["num_samples"] == 11025
        assert item["shape"] == (128, 87)
        assert result["elapsed_s"] >= 0.0

    @pytest.mark.integration
    def test_default_folder_and_backend(self, tmp_path: Path, wav_writer) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        out_dir = tmp_path / "timefreq"
        wav_writer(wav_dir / "A.wav", _tone(0.1), SR)
        wav_writer(wav_dir / "B.wav", np.zeros(1000), SR)

        result = run_timefreq(
            output_dir=out_dir, raw_audio_dir=wav_dir, window_size=128, backend="numpy"
        )

        assert result["success"] is True
        assert result["total"] == 2
        assert (out_dir / "A_timefreq_numpy_128.npy").exists()
        silent = np.load(out_dir / "B_timefreq_numpy_128.npy")
        assert not silent.any()

    @pytest.mark.integration
    def test_dry_run_writes_nothing(self, tmp_path: Path, wav_writer) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        out_dir = tmp_path / "timefreq"
        wav_writer(wav_dir / "TRACK02.wav", _tone(0.1), SR)

        result = run_timefreq(
            audio_files=[wav_dir / "TRACK02.wav"],
            output_dir=out_dir,
            raw_audio_dir=wav_dir,
            window_size=256,
            dry_run=True,
        )

        assert result["success"] is True
        assert "[DRY RUN]" in result["message"]
        assert not out_dir.exists()

    @pytest.mark.integration
    def test_missing_file_recorded_as_failure(self, tmp_path: Path) -> None:
        result = run_timefreq(
            audio_files=[tmp_path / "nope.wav"],
            output_dir=tmp_path / "out",
            raw_audio_dir=tmp_path,
            window_size=256,
        )
        assert result["success"] is False
        assert result["failed"] == 1
        assert result["failures"][0]["reason"] == "File not found"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("kwargs", "fragment"),
        [
            ({"window_size": 1000}, "power of two"),
            ({"window_size": 0}, "positive"),
            ({"backend": "fftw"}, "Unknown FFT backend"),
            ({"workers": 0}, "workers"),
        ],
    )
    def test_configuration_errors_reported_before_files(
        self, tmp_path: Path, kwargs: dict, fragment: str
    ) -> None:
        result = run_timefreq(
            audio_files=[tmp_path / "nope.wav"],
            output_dir=tmp_path / "out",
            raw_audio_dir=tmp_path,
            **kwargs,
        )
        assert result["success"] is False
        assert result["total"] == 0
        assert fragment in result["message"]
        assert not (tmp_path / "out").exists()

    @pytest.mark.unit
    def test_no_files(self, tmp_path: Path) -> None:
        result = run_timefreq(output_dir=tmp_path / "out", raw_audio_dir=tmp_path / "empty")
        assert result["success"] is True
        assert result["total"] == 0

    @pytest.mark.unit
    def test_default_backend_is_library_fft(self) -> None:
        assert PIPELINE_DEFAULT_BACKEND == "numpy"

    @pytest.mark.integration
    def test_phase_timings_logged_at_info(
        self, tmp_path: Path, wav_writer, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="tfmatrix.pipeline.timefreq")
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        wav_writer(wav_dir / "TRACK04.wav", _tone(0.1), SR)

        result = run_timefreq(
            audio_files=[wav_dir / "TRACK04.wav"],
            output_dir=tmp_path / "out",
            raw_audio_dir=wav_dir,
            window_size=256,
            dry_run=True,
        )

        assert result["success"] is True
        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert any(m.startswith("windows completed in") for m in messages)
        assert any(m.startswith("total completed in") for m in messages)


class TestTimefreqCLI:
    """CLI tests via Typer's runner."""

    @pytest.mark.integration
    def test_cli_writes_output(
        self, tmp_path: Path, wav_writer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        out_dir = tmp_path / "timefreq"
        monkeypatch.setattr("tfmatrix.cli.commands.timefreq.TIMEFREQ_OUTPUT_DIR", out_dir)
        wav = tmp_path / "CLI01.wav"
        wav_writer(wav, _tone(0.1), SR)

        runner = CliRunner()
        res = runner.invoke(app, ["timefreq", str(wav), "-w", "256", "-j", "2", "--no-log"])

        assert res.exit_code == 0, res.output
        assert "✓ timefreq" in res.output
        assert "elapsed:" in res.output
        assert (out_dir / "CLI01_timefreq_numpy_256.npy").exists()

    @pytest.mark.integration
    def test_cli_writes_log_file(
        self, tmp_path: Path, wav_writer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        logs_dir = tmp_path / "logs"
        monkeypatch.setattr("tfmatrix.cli.commands.timefreq.TIMEFREQ_OUTPUT_DIR", tmp_path / "out")
        monkeypatch.setattr("tfmatrix.cli.base.DERIVED_LOGS_DIR", logs_dir)
        wav = tmp_path / "CLI02.wav"
        wav_writer(wav, _tone(0.1), SR)

        res = CliRunner().invoke(app, ["timefreq", str(wav), "-w", "128", "--dry-run"])

        assert res.exit_code == 0, res.output
        logs = list(logs_dir.glob("*_timefreq_numpy_dryrun.log"))
        assert len(logs) == 1
        assert "window_size: 128" in logs[0].read_text(encoding="utf-8")

    @pytest.mark.integration
    def test_cli_invalid_window_exits_nonzero(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("tfmatrix.cli.commands.timefreq.TIMEFREQ_OUTPUT_DIR", tmp_path / "out")
        res = CliRunner().invoke(app, ["timefreq", "x.wav", "-w", "300", "--no-log"])
        assert res.exit_code == 1
        assert "power of two" in res.output

    @pytest.mark.integration
    def test_cli_options_before_and_after_files(
        self, tmp_path: Path, wav_writer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        out_dir = tmp_path / "timefreq"
        monkeypatch.setattr("tfmatrix.cli.commands.timefreq.TIMEFREQ_OUTPUT_DIR", out_dir)
        first = tmp_path / "CLI03.wav"
        second = tmp_path / "CLI04.wav"
        wav_writer(first, _tone(0.1), SR)
        wav_writer(second, _tone(0.1, freq=880.0), SR)

        res = CliRunner().invoke(
            app,
            ["timefreq", "-w", "128", str(first), "--backend", "recursive", str(second), "--no-log"],
        )

        assert res.exit_code == 0, res.output
        assert "for 2 file(s)" in res.output
        assert sorted(p.name for p in out_dir.glob("*.npy")) == [
            "CLI03_timefreq_recursive_128.npy",
            "CLI04_timefreq_recursive_128.npy",
        ]
