"""Command: rewrite go.mod in canonical form."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gosubmod.commands._base import SubmodCommand

if TYPE_CHECKING:
    from gosubmod.commands._context import AppContext


@click.command(
    "fmt",
    cls=SubmodCommand,
    examples="""\
  gosubmod fmt
  gosubmod --modfile tools/go.mod f""",
)
@click.pass_obj
def fmt_cmd(app: AppContext) -> None:
    """Reformat go.mod without changing its directives (alias: f)."""
    from gosubmod.services.submodules import SubmoduleService

    app.emit(SubmoduleService(app.workspace).fmt())
