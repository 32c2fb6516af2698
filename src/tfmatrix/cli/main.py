from __future__ import annotations

import typer

from .base import configure_logging
from .commands.timefreq import app as timefreq_app

configure_logging()
app = typer.Typer(
    help="Time-frequency analysis CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(timefreq_app, name="timefreq")


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
