"""Command: drop local replace directives of submodules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gosubmod.commands._base import SubmodCommand

if TYPE_CHECKING:
    from gosubmod.commands._context import AppContext


@click.command(
    cls=SubmodCommand,
    examples="""\
  gosubmod drop
  gosubmod d example.com/a/b
  gosubmod drop --dry-run""",
)
@click.argument("modules", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Print the resulting go.mod instead of writing it.")
@click.pass_obj
def drop(app: AppContext, modules: tuple[str, ...], dry_run: bool) -> None:
    """Remove local replaces of MODULES (default: all submodules) (alias: d)."""
    from gosubmod.services.submodules import SubmoduleService

    app.emit(SubmoduleService(app.workspace).drop(modules, dry_run=dry_run))
