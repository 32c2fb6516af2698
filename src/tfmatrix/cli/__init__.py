"""Typer-based command line interface."""
