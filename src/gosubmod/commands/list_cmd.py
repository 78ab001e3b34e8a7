"""Command: list the submodules required by the main module."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gosubmod.commands._base import SubmodCommand

if TYPE_CHECKING:
    from gosubmod.commands._context import AppContext


@click.command(
    "list",
    cls=SubmodCommand,
    examples="""\
  gosubmod list
  gosubmod -q l
  gosubmod --json list
  gosubmod --modfile sub/go.mod list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List submodules, one per line (alias: l)."""
    from gosubmod.services.submodules import SubmoduleService

    app.emit(SubmoduleService(app.workspace).list_submodules())
