"""Semantic view of a go.mod file.

:func:`parse_modfile` interprets the syntax tree from
:mod:`gosubmod.domain.syntax` into module, require, replace, and the other
directives.  Every entry keeps a reference to its syntax line so that
edits rewrite the file in place.

Validation is limited to what locating submodules and their replace
directives needs: directive shapes are checked, versions are not.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from gosubmod.domain.errors import ManifestMutationError, ManifestParseError
from gosubmod.domain.modpath import ModuleVersion
from gosubmod.domain.syntax import FileSyntax, Line, LineBlock, parse_syntax

_BLOCK_VERBS = frozenset({"require", "exclude", "replace", "retract", "godebug", "tool", "ignore"})
_LINE_VERBS = frozenset({"module", "go", "toolchain"})
_ARROW = "=>"


@dataclass(eq=False)
class ModuleStmt:
    """The ``module`` directive."""

    mod: ModuleVersion
    deprecated: str = ""
    syntax: Line | None = None


@dataclass(eq=False)
class Require:
    """A ``require`` entry."""

    mod: ModuleVersion
    indirect: bool = False
    syntax: Line | None = None


@dataclass(eq=False)
class Exclude:
    """An ``exclude`` entry."""

    mod: ModuleVersion
    syntax: Line | None = None


@dataclass(eq=False)
class Replace:
    """A ``replace`` entry: ``old [version] => new [version]``.

    ``new.version`` is empty when ``new.path`` is a filesystem path.
    """

    old: ModuleVersion
    new: ModuleVersion
    syntax: Line | None = None

    def __str__(self) -> str:
        old = f"{self.old.path} {self.old.version}".strip()
        new = f"{self.new.path} {self.new.version}".strip()
        return f"{old} => {new}"


@dataclass(eq=False)
class Directive:
    """Any other directive (retract, godebug, tool, ignore), kept verbatim."""

    verb: str
    args: list[str]
    syntax: Line | None = None


@dataclass(eq=False)
class ModFile:
    """A parsed go.mod file."""

    syntax: FileSyntax
    module: ModuleStmt | None = None
    go: str = ""
    toolchain: str = ""
    require: list[Require] = field(default_factory=list)
    exclude: list[Exclude] = field(default_factory=list)
    replace: list[Replace] = field(default_factory=list)
    other: list[Directive] = field(default_factory=list)

    @property
    def module_path(self) -> str:
        return self.module.mod.path if self.module else ""

    # -- editing -----------------------------------------------------------

    def add_replace(
        self, old_path: str, old_version: str, new_path: str, new_version: str
    ) -> Replace:
        """Set the replacement for ``old_path [old_version]``.

        The first live replace with the same old path (any old version when
        *old_version* is empty) is rewritten in place; further matches are
        removed.  Without a match a new line is added next to the last
        replace for the same path, or after the last replace directive.
        """
        old = ModuleVersion(old_path, old_version)
        new = ModuleVersion(new_path, new_version)
        tokens = ["replace", auto_quote(old_path)]
        if old_version:
            tokens.append(old_version)
        tokens += [_ARROW, auto_quote(new_path)]
        if new_version:
            tokens.append(new_version)

        updated: Replace | None = None
        hint: Line | None = None
        for r in self.replace:
            if r.syntax is None or r.syntax.removed:
                continue
            if r.old.path == old_path and (not old_version or r.old.version == old_version):
                if updated is None:
                    r.old = old
                    r.new = new
                    self.syntax.update_line(r.syntax, *tokens)
                    updated = r
                    continue
                self.syntax.remove_line(r.syntax)
                continue
            if r.old.path == old_path:
                hint = r.syntax

        if updated is not None:
            return updated
        line = self.syntax.add_line(hint, *tokens)
        entry = Replace(old=old, new=new, syntax=line)
        self.replace.append(entry)
        return entry

    def drop_replace(
        self, old_path: str, old_version: str, *, local_only: bool = False
    ) -> list[Replace]:
        """Remove every replace for exactly ``old_path old_version``.

        With *local_only* set, only replaces whose target path starts with
        ``.`` are removed.

        Raises:
            ManifestMutationError: if no live replace matched.
        """
        dropped: list[Replace] = []
        for r in self.replace:
            if r.syntax is None or r.syntax.removed:
                continue
            if r.old.path != old_path or r.old.version != old_version:
                continue
            if local_only and not r.new.path.startswith("."):
                continue
            self.syntax.remove_line(r.syntax)
            dropped.append(r)
        if not dropped:
            target = f"{old_path} {old_version}".strip()
            raise ManifestMutationError(f"replace directive for {target} not found")
        return dropped

    def live_replaces(self) -> list[Replace]:
        return [r for r in self.replace if r.syntax is None or not r.syntax.removed]

    def cleanup(self) -> None:
        """Drop removed entries from both the semantic lists and the tree."""

        def live(entry: Require | Exclude | Replace | Directive) -> bool:
            return entry.syntax is None or not entry.syntax.removed

        self.require = [r for r in self.require if live(r)]
        self.exclude = [e for e in self.exclude if live(e)]
        self.replace = [r for r in self.replace if live(r)]
        self.other = [d for d in self.other if live(d)]
        self.syntax.cleanup()

    def format(self) -> str:
        """Clean up and print the file in canonical form."""
        self.cleanup()
        return self.syntax.format()


# ---------------------------------------------------------------------------
# Quoting
# ---------------------------------------------------------------------------


def must_quote(s: str) -> bool:
    """Whether *s* has to be quoted to survive as a single token."""
    for ch in s:
        if ch in " \"'`":
            return True
        if ch in "()[]{},":
            if len(s) > 1:
                return True
        elif not ch.isprintable():
            return True
    return s == "" or "//" in s or "/*" in s


def auto_quote(s: str) -> str:
    if must_quote(s):
        return json.dumps(s, ensure_ascii=False)
    return s


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def _unquote(tok: str) -> str:
    if tok.startswith("`"):
        return tok[1:-1]
    if not tok.startswith('"'):
        return tok
    body = tok[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        esc = body[i + 1 : i + 2]
        if esc in _ESCAPES:
            out.append(_ESCAPES[esc])
            i += 2
        elif esc in ("x", "u", "U"):
            width = {"x": 2, "u": 4, "U": 8}[esc]
            digits = body[i + 2 : i + 2 + width]
            try:
                out.append(chr(int(digits, 16)))
            except ValueError:
                raise ValueError(f"invalid escape in {tok}") from None
            i += 2 + width
        else:
            raise ValueError(f"invalid escape in {tok}")
    return "".join(out)


def is_directory_path(path: str) -> bool:
    """Whether a replacement target is a filesystem path rather than a module."""
    return (
        path in (".", "..")
        or path.startswith(("./", ".\\", "../", "..\\", "/", "\\"))
        or (len(path) >= 2 and path[0].isascii() and path[0].isalpha() and path[1] == ":")
    )


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _Parser:
    def __init__(self, mod: ModFile) -> None:
        self.mod = mod
        self.name = mod.syntax.name

    def error(self, line: Line, reason: str) -> ManifestParseError:
        return ManifestParseError(self.name, line.start, reason)

    def unquote(self, line: Line, tok: str) -> str:
        try:
            return _unquote(tok)
        except ValueError as exc:
            raise self.error(line, str(exc)) from None

    def run(self) -> None:
        for stmt in self.mod.syntax.stmts:
            if isinstance(stmt, Line):
                if stmt.tokens:
                    self.directive(stmt, stmt.tokens[0], stmt.tokens[1:])
            elif isinstance(stmt, LineBlock):
                verb = stmt.tokens[0]
                if verb not in _BLOCK_VERBS or len(stmt.tokens) > 1:
                    raise ManifestParseError(
                        self.name, stmt.start, f"unknown block type: {' '.join(stmt.tokens)}"
                    )
                for line in stmt.lines:
                    self.directive(line, verb, line.tokens)

    def directive(self, line: Line, verb: str, args: list[str]) -> None:
        if verb not in _BLOCK_VERBS and verb not in _LINE_VERBS:
            raise self.error(line, f"unknown directive: {verb}")
        handler = getattr(self, f"_{verb}", None)
        if handler is None:
            self.mod.other.append(Directive(verb=verb, args=list(args), syntax=line))
            return
        handler(line, args)

    def _module(self, line: Line, args: list[str]) -> None:
        if self.mod.module is not None:
            raise self.error(line, "repeated module statement")
        if len(args) != 1:
            raise self.error(line, "usage: module module/path")
        deprecated = ""
        for comment in [*line.comments.before, line.comments.suffix]:
            text = comment.removeprefix("//").strip()
            if text.startswith("Deprecated:"):
                deprecated = text.removeprefix("Deprecated:").strip()
        self.mod.module = ModuleStmt(
            mod=ModuleVersion(self.unquote(line, args[0])), deprecated=deprecated, syntax=line
        )

    def _go(self, line: Line, args: list[str]) -> None:
        if self.mod.go:
            raise self.error(line, "repeated go statement")
        if len(args) != 1:
            raise self.error(line, "go directive expects exactly one argument")
        self.mod.go = self.unquote(line, args[0])

    def _toolchain(self, line: Line, args: list[str]) -> None:
        if self.mod.toolchain:
            raise self.error(line, "repeated toolchain statement")
        if len(args) != 1:
            raise self.error(line, "toolchain directive expects exactly one argument")
        self.mod.toolchain = self.unquote(line, args[0])

    def _module_version(self, line: Line, verb: str, args: list[str]) -> ModuleVersion:
        if len(args) != 2:
            raise self.error(line, f"usage: {verb} module/path v1.2.3")
        return ModuleVersion(self.unquote(line, args[0]), self.unquote(line, args[1]))

    def _require(self, line: Line, args: list[str]) -> None:
        mod = self._module_version(line, "require", args)
        suffix = line.comments.suffix.removeprefix("//").strip()
        indirect = suffix == "indirect" or suffix.startswith("indirect;")
        self.mod.require.append(Require(mod=mod, indirect=indirect, syntax=line))

    def _exclude(self, line: Line, args: list[str]) -> None:
        mod = self._module_version(line, "exclude", args)
        self.mod.exclude.append(Exclude(mod=mod, syntax=line))

    def _replace(self, line: Line, args: list[str]) -> None:
        usage = (
            "usage: replace module/path [v1.2.3] => other/module v1.4"
            " or replace module/path [v1.2.3] => ../local/directory"
        )
        try:
            arrow = args.index(_ARROW)
        except ValueError:
            raise self.error(line, usage) from None
        if arrow not in (1, 2) or len(args) - arrow - 1 not in (1, 2):
            raise self.error(line, usage)

        old_path = self.unquote(line, args[0])
        old_version = self.unquote(line, args[1]) if arrow == 2 else ""
        new_path = self.unquote(line, args[arrow + 1])
        new_version = self.unquote(line, args[arrow + 2]) if len(args) - arrow - 1 == 2 else ""

        if not new_version and not is_directory_path(new_path):
            raise self.error(
                line,
                "replacement module without version must be directory path "
                "(rooted or starting with ./ or ../)",
            )
        if new_version and is_directory_path(new_path):
            raise self.error(line, "replacement module directory path must not have version")

        self.mod.replace.append(
            Replace(
                old=ModuleVersion(old_path, old_version),
                new=ModuleVersion(new_path, new_version),
                syntax=line,
            )
        )


def parse_modfile(filename: str, data: str | bytes) -> ModFile:
    """Parse go.mod content.

    Raises:
        ManifestParseError: if the content is not a well-formed go.mod.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestParseError(filename, 1, f"invalid UTF-8: {exc}") from None
    else:
        text = data
    mod = ModFile(syntax=parse_syntax(filename, text))
    _Parser(mod).run()
    return mod
