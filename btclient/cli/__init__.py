"""Command-line interface for btclient."""

from btclient.cli.main import cli, main

__all__ = ["cli", "main"]
