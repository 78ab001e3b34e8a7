"""Root CLI group for gosubmod with global flags and command registration."""

from __future__ import annotations

import click

from gosubmod import __version__
from gosubmod.commands import register_commands
from gosubmod.commands._base import SubmodGroup
from gosubmod.commands._context import AppContext
from gosubmod.config.settings import GosubmodSettings


@click.group(
    cls=SubmodGroup,
    invoke_without_command=True,
    aliases={"l": "list", "a": "add", "d": "drop", "f": "fmt"},
    examples="""\
  gosubmod list
  gosubmod add
  gosubmod drop example.com/a/b
  gosubmod --no-strict --modfile sub/go.mod add""",
)
@click.version_option(version=__version__, prog_name="gosubmod")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-m",
    "--modfile",
    default=None,
    type=click.Path(dir_okay=False),
    help="go.mod to edit (default: ./go.mod).",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Require submodule directories to exist before adding replaces.",
)
@click.option(
    "--detection",
    type=click.Choice(["prefix", "manifest"]),
    default=None,
    help="How submodules are recognised among the requires.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    modfile: str | None,
    strict: bool | None,
    detection: str | None,
) -> None:
    """gosubmod: manage local replace directives for Go submodules."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(2)

    ctx.obj = AppContext(
        GosubmodSettings.from_cli(
            config_path=config_path,
            # Unset flags fall through to env vars and gosubmod.toml
            json_output=json_output or None,
            quiet=quiet or None,
            verbose=verbose or None,
            log_json=log_json or None,
            modfile=modfile,
            strict=strict,
            detection=detection,
        )
    )


register_commands(cli)
