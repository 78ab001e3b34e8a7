"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from gosubmod.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from gosubmod.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    A dry-run manifest is returned verbatim.
    """
    content = _dry_run_content(result)
    if content is not None:
        return content.rstrip("\n")

    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    content = _dry_run_content(result)
    if content is not None:
        return content.rstrip("\n")

    # Bare module paths for list results, possibly none
    if result.op == "list":
        return "\n".join(str(item["path"]) for item in result.data.get("items", []))

    replaces = result.data.get("replaces")
    if replaces and isinstance(replaces, list):
        return "\n".join(str(r["old"]) for r in replaces)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _dry_run_content(result: ServiceResult) -> str | None:
    if not result.ok:
        return None
    content = result.data.get("content")
    return content if isinstance(content, str) else None


def _module_spec(item: dict[str, Any]) -> str:
    version = item.get("version")
    return f"{item['path']}@{version}" if version else str(item["path"])


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    console.print(Text.assemble(("OK", "submod.ok"), (f"  {result.op}", "submod.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = (f"  {key}: ", "submod.key")
    if key in ("manifest", "path"):
        v = Text(str(value), style="submod.path")
    elif key == "module":
        v = Text(str(value), style="submod.module")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v), soft_wrap=True)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text.assemble(("ERROR", "submod.error"), (f"  {result.op}", "submod.op"), " — ", msg)
    console.print(line, soft_wrap=True)
    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"), soft_wrap=True)


# ── Submodule renderers ───────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One submodule per line, ``path@version``."""
    if verbose:
        _status_line(console, result)
        _field(console, "manifest", result.data.get("manifest", ""))
        _field(console, "module", result.data.get("module", ""))
        _field(console, "count", result.data.get("count", 0))
    for item in result.data.get("items", []):
        console.print(Text(_module_spec(item), style="submod.module"), soft_wrap=True)


def _render_replaces(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/drop results as a table of replace directives."""
    _status_line(console, result)
    _field(console, "manifest", result.data.get("manifest", ""))
    _field(console, "count", result.data.get("count", 0))

    replaces = result.data.get("replaces", [])
    if not replaces:
        return

    console.print()
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Module", style="submod.module", no_wrap=True)
    table.add_column("Replacement", style="submod.path", no_wrap=True)
    if verbose:
        table.add_column("Version", style="submod.version")
    for r in replaces:
        row = [str(r.get("old", "")), str(r.get("new", ""))]
        if verbose:
            row.append(str(r.get("new_version", "")))
        table.add_row(*row)
    console.print(table)


def _render_fmt(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "manifest", result.data.get("manifest", ""))
    _field(console, "changed", "yes" if result.data.get("changed") else "no")



# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list": _render_list,
    "add": _render_replaces,
    "drop": _render_replaces,
    "fmt": _render_fmt,
}
