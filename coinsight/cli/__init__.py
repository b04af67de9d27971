"""CLI commands for coinsight.

This package provides the command-line interface: single-timeframe
analysis, multi-timeframe synthesis and the timeframe table.
"""

from coinsight.cli.main import cli, main

__all__ = ["cli", "main"]
