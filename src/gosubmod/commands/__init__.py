"""Subcommand modules for gosubmod.

Provides register_commands() which uses deferred imports to keep
``gosubmod --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from gosubmod.commands.add import add
    from gosubmod.commands.drop import drop
    from gosubmod.commands.fmt_cmd import fmt_cmd
    from gosubmod.commands.list_cmd import list_cmd

    cli.add_command(list_cmd)
    cli.add_command(add)
    cli.add_command(drop)
    cli.add_command(fmt_cmd)
