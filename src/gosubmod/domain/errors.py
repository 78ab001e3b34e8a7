"""Error kinds raised by the domain layer.

Every error carries a stable ``code`` that the service layer copies into
``ServiceError.code``.  Errors leaving :class:`SubmoduleFile` are bound to
the manifest path and the module list the caller asked for.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Self


class SubmodError(Exception):
    """Base class for all gosubmod errors."""

    code = "SUBMOD_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.manifest_path: str | None = None
        self.modules: list[str] = []

    def bind(self, manifest_path: str | None, modules: Iterable[str]) -> Self:
        """Attach invocation context (first binding wins)."""
        if self.manifest_path is None:
            self.manifest_path = manifest_path
            self.modules = list(modules)
        return self

    @property
    def detail(self) -> dict[str, object]:
        detail: dict[str, object] = {}
        if self.manifest_path is not None:
            detail["manifest_path"] = self.manifest_path
        if self.modules:
            detail["modules"] = list(self.modules)
        return detail

    def __str__(self) -> str:
        if self.manifest_path is None:
            return self.message
        modules = " ".join(self.modules) if self.modules else "<all>"
        return f"{self.manifest_path} [{modules}]: {self.message}"


class InvalidModulePath(SubmodError):
    """A module path argument failed validation."""

    code = "INVALID_MODULE_PATH"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"malformed module path {path!r}: {reason}")
        self.path = path
        self.reason = reason


class MissingSubmoduleDirectory(SubmodError):
    """Strict mode: a submodule has no directory on disk."""

    code = "MISSING_SUBMODULE_DIRECTORY"

    def __init__(self, directory: str) -> None:
        super().__init__(f"expected {directory} to be a directory")
        self.directory = directory


class ManifestParseError(SubmodError):
    """The go.mod text could not be parsed."""

    code = "MANIFEST_PARSE_ERROR"

    def __init__(self, filename: str, line: int, reason: str) -> None:
        location = f"{filename}:{line}" if filename else f"line {line}"
        super().__init__(f"{location}: {reason}")
        self.filename = filename
        self.line = line
        self.reason = reason


class ManifestMutationError(SubmodError):
    """Adding or dropping a directive failed."""

    code = "MANIFEST_MUTATION_ERROR"


class FileIOError(SubmodError):
    """Reading or writing a file failed."""

    code = "FILE_IO_ERROR"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
