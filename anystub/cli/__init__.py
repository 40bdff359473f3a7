from __future__ import annotations

import sys

import click
from rich.console import Console

from .. import __version__

console = Console()


@click.group()
@click.version_option(
    version=__version__, prog_name="anystub"
)
def cli():
    """Diagnostics for any-instance stubbing."""
    pass


from . import commands  # noqa: E402, F401


def main():
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        sys.exit(130)
