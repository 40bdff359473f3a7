from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from anystub.interception.visibility import method_table, owner_of
from anystub.types import Visibility

VISIBILITY_STYLE_MAP = {
    Visibility.PUBLIC: "[green]public[/green]",
    Visibility.PROTECTED: "[yellow]protected[/yellow]",
    Visibility.PRIVATE: "[red]private[/red]",
    Visibility.UNDEFINED: "[dim]undefined[/dim]",
}


class VisibilityTableRenderer:
    def __init__(self, console: Console):
        self._console = console

    def build_rows(
        self, klass: type, own_only: bool = False
    ) -> list[tuple[str, Visibility, str]]:
        rows = []
        for name, visibility in sorted(
            method_table(klass).items()
        ):
            owner = owner_of(klass, name)
            if own_only and owner is not klass:
                continue
            rows.append(
                (
                    name,
                    visibility,
                    owner.__qualname__ if owner else "-",
                )
            )
        return rows

    def render(self, klass: type, own_only: bool = False):
        table = Table(
            title=f"[bold]{klass.__module__}.{klass.__qualname__}[/bold]",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Method", style="white")
        table.add_column("Visibility")
        table.add_column("Owner", style="dim")

        for name, visibility, owner in self.build_rows(
            klass, own_only
        ):
            table.add_row(
                name, VISIBILITY_STYLE_MAP[visibility], owner
            )

        self._console.print()
        self._console.print(table)
