"""Custom Click base classes with --examples and alias support.

Provides SubmodCommand and SubmodGroup that accept an ``examples``
parameter.  When ``--examples`` is passed, the command prints usage
examples and exits.  SubmodGroup also resolves short command aliases.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class SubmodCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class SubmodGroup(click.Group):
    """Click Group subclass with ``--examples`` and command aliases.

    Sets ``command_class = SubmodCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    ``aliases`` maps a short name to the registered command name.
    """

    command_class = SubmodCommand

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        aliases: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.aliases = dict(aliases or {})
        if examples:
            _add_examples_option(self, examples)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)
        if cmd is None and cmd_name in self.aliases:
            cmd = super().get_command(ctx, self.aliases[cmd_name])
        return cmd

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # Report the canonical name so ctx.invoked_subcommand is never an alias
        _name, cmd, rest = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, rest
