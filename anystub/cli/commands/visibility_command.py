from __future__ import annotations

import importlib
import sys

import click

from .. import cli, console
from ..renderers.visibility_table_renderer import (
    VisibilityTableRenderer,
)


def load_class(path: str) -> type:
    """Resolve ``package.module:Outer.Inner`` to a class."""
    module_name, _, qualname = path.partition(":")
    if not module_name or not qualname:
        raise click.BadParameter(
            f"expected MODULE:CLASS, got {path!r}"
        )
    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise click.BadParameter(f"{path} is not a class")
    return obj


@cli.command()
@click.argument("target")
@click.option(
    "--own",
    is_flag=True,
    help="Only list methods defined directly on the class.",
)
def visibility(target: str, own: bool):
    """
    List a class's methods with their visibility and owner.

    Examples:
      anystub visibility decimal:Decimal
      anystub visibility myapp.models:Account --own
    """
    try:
        klass = load_class(target)
    except (ImportError, AttributeError) as e:
        console.print(f"  [red]✗[/red] Cannot load {target}: {e}")
        sys.exit(1)

    VisibilityTableRenderer(console).render(klass, own_only=own)
