"""Command: add local replace directives for submodules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gosubmod.commands._base import SubmodCommand

if TYPE_CHECKING:
    from gosubmod.commands._context import AppContext


@click.command(
    cls=SubmodCommand,
    examples="""\
  gosubmod add
  gosubmod add example.com/a/b
  gosubmod a example.com/a/b example.com/a/c/v2@v2.1
  gosubmod --no-strict add --dry-run""",
)
@click.argument("modules", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Print the resulting go.mod instead of writing it.")
@click.pass_obj
def add(app: AppContext, modules: tuple[str, ...], dry_run: bool) -> None:
    """Replace MODULES (default: all submodules) with their local directories (alias: a)."""
    from gosubmod.services.submodules import SubmoduleService

    app.emit(SubmoduleService(app.workspace).add(modules, dry_run=dry_run))
