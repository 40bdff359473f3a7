from __future__ import annotations

import sys

import click
from rich import box
from rich.table import Table

from ... import __version__
from ...interception.strategies import (
    lookup_hook_supported,
    select_strategy,
)
from ...types import StrategyName
from .. import cli, console


class SystemInfoRenderer:
    def __init__(self, strategy: StrategyName):
        self._console = console
        self._strategy = strategy

    def render(self):
        selected, detected = select_strategy(self._strategy)

        table = Table(
            box=box.SIMPLE,
            show_header=False,
            padding=(0, 2),
        )
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Version", __version__)
        table.add_row("Python", sys.version.split()[0])
        table.add_row("Platform", sys.platform)
        table.add_row(
            "Lookup hook",
            "[green]✓ supported[/green]"
            if lookup_hook_supported()
            else "[yellow]○ unavailable[/yellow]",
        )
        table.add_row(
            "Strategy",
            f"{selected.name.value} "
            f"[dim]({'detected' if detected else 'configured'})[/dim]",
        )

        self._console.print()
        self._console.print(table)


@cli.command()
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in StrategyName]),
    default=StrategyName.AUTO.value,
    show_default=True,
    help="Restoration strategy to resolve.",
)
def info(strategy: str):
    """Show version and the restoration strategy in effect."""
    SystemInfoRenderer(StrategyName(strategy)).render()
