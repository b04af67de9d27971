"""Timeframes command for coinsight CLI."""

import click
from rich.console import Console
from rich.table import Table

from coinsight.models import TIMEFRAMES

console = Console()


@click.command()
def timeframes() -> None:
    """List the supported timeframes and how their candles are built."""
    table = Table(title="Timeframes", show_header=True, header_style="bold cyan")

    table.add_column("Code", style="bold")
    table.add_column("Duration")
    table.add_column("History", justify="right")
    table.add_column("Candles", justify="right")
    table.add_column("Build")
    table.add_column("Horizon")

    for config in TIMEFRAMES.values():
        table.add_row(
            config.code.value,
            config.label,
            f"{config.days} days",
            str(config.points),
            f"{config.mode.value} ({config.bucket})",
            config.horizon.value.replace("_", " "),
        )

    console.print(table)
