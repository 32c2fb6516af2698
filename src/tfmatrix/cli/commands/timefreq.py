"""CLI command for time-frequency matrix computation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...global_config import RAW_AUDIO_DIR
from ...pipeline.timefreq import PIPELINE_DEFAULT_BACKEND, TIMEFREQ_OUTPUT_DIR, run_timefreq
from ...stft.config import DEFAULT_WINDOW_SIZE
from ..base import BaseCLI

app = typer.Typer(
    name="timefreq",
    help="Compute normalized STFT magnitude matrices from raw audio and write .npy to data/derived/timefreq",
    # callback-only group: let options follow the file arguments
    context_settings={"allow_interspersed_args": True},
)


@app.callback(invoke_without_command=True)
def timefreq(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Audio file(s) to process. If omitted, all .wav files in data/datasets/raw/audio are used.",
        ),
    ] = [],
    window: Annotated[
        int,
        typer.Option("--window", "-w", help="Window size W (power of two). Hop is W/2."),
    ] = DEFAULT_WINDOW_SIZE,
    backend: Annotated[
        str,
        typer.Option(
            "--backend",
            "-b",
            help="FFT engine: numpy, scipy, recursive. The pure-Python recursive engine is orders of magnitude slower on full tracks.",
        ),
    ] = PIPELINE_DEFAULT_BACKEND,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Worker threads for the window phase. Default: executor default."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute but do not write files."),
    ] = False,
    no_log: Annotated[
        bool,
        typer.Option("--no-log", help="Do not write a log file to data/logs/derived."),
    ] = False,
) -> None:
    """Compute time-frequency matrices and write to data/derived/timefreq.

    Output filenames: <track-name>_timefreq_<backend>_<W>.npy
    Arrays have shape (W/2, F) with values in [0, 1].
    """
    cli = BaseCLI("timefreq")

    audio_list = list(files) if files else None

    def _run() -> dict:
        return run_timefreq(
            audio_files=audio_list,
            output_dir=TIMEFREQ_OUTPUT_DIR,
            raw_audio_dir=RAW_AUDIO_DIR,
            window_size=window,
            backend=backend.lower(),
            workers=workers,
            dry_run=dry_run,
        )

    pre_message = (
        "Computing time-frequency matrices (dry-run; no files will be written)..."
        if dry_run
        else f"Computing W={window} time-frequency matrices for "
        + (f"{len(audio_list)} file(s)..." if audio_list else "all audio in raw folder...")
    )
    inputs_desc = (
        str([str(p) for p in audio_list]) if audio_list
        else f"all .wav in {RAW_AUDIO_DIR}"
    )
    cli.handle_cli_operation(
        operation="timefreq",
        op_callable=_run,
        pre_message=pre_message,
        log_module="timefreq",
        log_method=backend.lower(),
        log_dry_run=dry_run,
        enable_log=not no_log,
        log_context={
            "inputs": inputs_desc,
            "output_dir": str(TIMEFREQ_OUTPUT_DIR),
            "window_size": window,
            "workers": workers,
        },
    )
