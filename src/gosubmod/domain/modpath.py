"""Module paths and versions.

Pure functions, no infrastructure dependencies.  Implements the Go module
path rules needed to validate the module arguments given on the command
line and to strip major-version suffixes when deriving directory names.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from gosubmod.domain import semver
from gosubmod.domain.errors import InvalidModulePath

_BAD_WINDOWS_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

_MOD_PATH_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._~"
)
_FIRST_ELEM_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-.")


@dataclass(frozen=True)
class ModuleVersion:
    """A module path paired with an optional version."""

    path: str
    version: str = ""

    def __str__(self) -> str:
        if self.version:
            return f"{self.path}@{self.version}"
        return self.path


class _PathError(ValueError):
    pass


def _check_elem(elem: str) -> None:
    if elem == "":
        raise _PathError("empty path element")
    if elem.count(".") == len(elem):
        raise _PathError(f"invalid path element {elem!r}")
    if elem[0] == ".":
        raise _PathError("leading dot in path element")
    if elem[-1] == ".":
        raise _PathError("trailing dot in path element")
    for ch in elem:
        if ch not in _MOD_PATH_CHARS:
            raise _PathError(f"invalid char {ch!r}")

    short = elem.split(".", 1)[0]
    if short.upper() in _BAD_WINDOWS_NAMES:
        raise _PathError(f"{short!r} disallowed as path element component on Windows")

    # Windows short names look like PROGRA~1.
    tilde = short.rfind("~")
    if 0 <= tilde < len(short) - 1 and short[tilde + 1 :].isdigit():
        raise _PathError("trailing tilde and digits in path element")


def _check_path(path: str) -> None:
    if path == "":
        raise _PathError("empty string")
    if path[0] == "-":
        raise _PathError("leading dash")
    if "//" in path:
        raise _PathError("double slash")
    if path[-1] == "/":
        raise _PathError("trailing slash")
    if path[0] == "/":
        raise _PathError("leading slash")
    for elem in path.split("/"):
        _check_elem(elem)

    first = path.split("/", 1)[0]
    if "." not in first:
        raise _PathError("missing dot in first path element")
    for ch in first:
        if ch not in _FIRST_ELEM_CHARS:
            raise _PathError(f"invalid char {ch!r} in first path element")
    if not split_path_version(path)[2]:
        raise _PathError("invalid version")


def check_path(path: str) -> None:
    """Validate *path* as a module path.

    Raises:
        InvalidModulePath: with the reason the path was rejected.
    """
    try:
        _check_path(path)
    except _PathError as exc:
        raise InvalidModulePath(path, str(exc)) from None


def is_valid_path(path: str) -> bool:
    try:
        _check_path(path)
    except _PathError:
        return False
    return True


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _split_gopkg_in(path: str) -> tuple[str, str, bool]:
    i = len(path)
    if path.endswith("-unstable"):
        i -= len("-unstable")
    while i > 0 and _is_digit(path[i - 1]):
        i -= 1
    if i <= 1 or path[i - 1] != "v" or path[i - 2] != ".":
        # gopkg.in paths always end in .vN
        return path, "", False
    prefix, path_major = path[: i - 2], path[i - 2 :]
    if len(path_major) <= 2 or (path_major[2] == "0" and path_major != ".v0"):
        return path, "", False
    return prefix, path_major, True


def split_path_version(path: str) -> tuple[str, str, bool]:
    """Split *path* into ``(prefix, path_major, ok)``.

    ``path_major`` is the major-version suffix (``/v2``, or ``.v3`` for
    gopkg.in paths) and is empty when the path has none.  ``ok`` is False
    for malformed suffixes such as ``/v1`` or ``/v0``.

        >>> split_path_version("example.com/a/c/v2")
        ('example.com/a/c', '/v2', True)
    """
    if path.startswith("gopkg.in/"):
        return _split_gopkg_in(path)

    i = len(path)
    dot = False
    while i > 0 and (_is_digit(path[i - 1]) or path[i - 1] == "."):
        if path[i - 1] == ".":
            dot = True
        i -= 1
    if i <= 1 or i == len(path) or path[i - 1] != "v" or path[i - 2] != "/":
        return path, "", True
    prefix, path_major = path[: i - 2], path[i - 2 :]
    if dot or len(path_major) <= 2 or path_major[2] == "0" or path_major == "/v1":
        return path, "", False
    return prefix, path_major, True


def canonical_version(version: str) -> str:
    """Canonicalise *version*; strings that are not semver are returned as-is."""
    return semver.canonical_module_version(version) or version


def parse_module_spec(spec: str) -> ModuleVersion:
    """Parse ``path`` or ``path@version`` into a :class:`ModuleVersion`."""
    path, sep, version = spec.partition("@")
    check_path(path)
    if sep and not version:
        raise InvalidModulePath(spec, "empty version after '@'")
    return ModuleVersion(path=path, version=canonical_version(version) if version else "")


def parse_module_specs(specs: Iterable[str]) -> list[ModuleVersion]:
    """Parse every spec, failing on the first invalid one (no partial result)."""
    return [parse_module_spec(spec) for spec in specs]


def contains_path(versions: Iterable[ModuleVersion], path: str) -> bool:
    """Whether any entry of *versions* has the given *path*."""
    return any(v.path == path for v in versions)
