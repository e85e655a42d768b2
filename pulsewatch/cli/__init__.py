"""CLI commands for PulseWatch.

This package provides the command-line interface for PulseWatch:
the long-running monitor plus one-shot price, weather and headline views.
"""

from pulsewatch.cli.main import cli, main

__all__ = ["cli", "main"]
