"""Submodules: nested modules required by their parent module.

A submodule is a ``require`` entry whose path lies under the main module
path.  :class:`SubmoduleFile` wraps a parsed :class:`ModFile` and adds or
drops ``replace`` directives that point each submodule at its directory
next to the manifest.

Which requires count as submodules is decided by a
:class:`SubmodulePredicate`.  The default :class:`PrefixPredicate` is a
plain textual prefix check, so ``example.com/ab`` counts as a submodule
of ``example.com/a``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from gosubmod.domain.errors import FileIOError, MissingSubmoduleDirectory, SubmodError
from gosubmod.domain.modfile import ModFile, Replace, Require
from gosubmod.domain.modpath import (
    ModuleVersion,
    contains_path,
    parse_module_specs,
    split_path_version,
)

logger = logging.getLogger(__name__)

MANIFEST_NAME = "go.mod"


class DirectoryProbe(Protocol):
    """Filesystem queries needed by the submodule logic.

    Both methods return False for missing paths and raise ``OSError`` for
    any other failure.
    """

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...


class SubmodulePredicate(Protocol):
    """Decides whether *candidate* is a submodule of *main*."""

    def is_submodule_of(self, candidate: str, main: str) -> bool: ...


class PrefixPredicate:
    """*candidate* has *main* as a proper textual prefix."""

    def is_submodule_of(self, candidate: str, main: str) -> bool:
        return bool(main) and candidate != main and candidate.startswith(main)


class ManifestPredicate:
    """*candidate* sits below *main* and its directory holds a go.mod."""

    def __init__(self, root: Path, probe: DirectoryProbe) -> None:
        self._root = root
        self._probe = probe

    def is_submodule_of(self, candidate: str, main: str) -> bool:
        if not candidate.startswith(main + "/"):
            return False
        manifest = self._root / submodule_dir_name(candidate, main) / MANIFEST_NAME
        try:
            return self._probe.is_file(manifest)
        except OSError as exc:
            raise FileIOError(str(manifest), exc.strerror or str(exc)) from exc


def submodule_dir_name(path: str, main: str) -> str:
    """Directory of submodule *path* relative to the main module root.

    The major-version suffix is not part of the directory name::

        >>> submodule_dir_name("example.com/a/c/v2", "example.com/a")
        'c'
    """
    prefix, _, _ = split_path_version(path)
    return prefix.removeprefix(main + "/")


def local_replace_path(dir_name: str) -> str:
    """``./<dir_name>`` using the host path separator."""
    return os.path.join(".", *dir_name.split("/"))


class SubmoduleFile:
    """A go.mod file that knows about its submodules.

    Attributes:
        modfile: The parsed manifest (owned for the length of one command).
        manifest_path: Absolute path of the manifest; submodule directories
            are resolved against its parent.
        strict: Require every replaced submodule directory to exist.
    """

    def __init__(
        self,
        modfile: ModFile,
        manifest_path: Path,
        *,
        strict: bool = True,
        predicate: SubmodulePredicate | None = None,
        probe: DirectoryProbe | None = None,
    ) -> None:
        if strict and probe is None:
            msg = "strict mode needs a DirectoryProbe"
            raise ValueError(msg)
        self.modfile = modfile
        self.manifest_path = manifest_path
        self.strict = strict
        self._predicate = predicate or PrefixPredicate()
        self._probe = probe

    @property
    def root(self) -> Path:
        return self.manifest_path.parent

    # -- detection ---------------------------------------------------------

    def submodules(self) -> list[Require]:
        """Requires that are submodules of the main module, in file order.

        A manifest without a ``module`` directive has no submodules.
        """
        main = self.modfile.module_path
        if not main:
            return []
        return [
            r for r in self.modfile.require if self._predicate.is_submodule_of(r.mod.path, main)
        ]

    def list_submodules(self) -> list[ModuleVersion]:
        return [r.mod for r in self.submodules()]

    # -- replace directives ------------------------------------------------

    def add_replaces(self, *modules: str) -> list[Replace]:
        """Point the selected submodules at their local directories.

        With no *modules* every detected submodule is selected.  Returns the
        replace entries that were written.
        """
        try:
            return self._add_replaces(modules)
        except SubmodError as exc:
            exc.bind(str(self.manifest_path), modules)
            raise

    def _add_replaces(self, modules: Sequence[str]) -> list[Replace]:
        submodules = self.submodules()
        specs = list(modules) or [r.mod.path for r in submodules]
        targets = parse_module_specs(specs)
        main = self.modfile.module_path

        written: list[Replace] = []
        for submodule in submodules:
            if not contains_path(targets, submodule.mod.path):
                continue
            name = submodule_dir_name(submodule.mod.path, main)
            if self.strict:
                self._check_directory(self.root / name)
            new_path = local_replace_path(name)
            logger.debug("replace %s => %s", submodule.mod.path, new_path)
            written.append(self.modfile.add_replace(submodule.mod.path, "", new_path, ""))
        return written

    def _check_directory(self, directory: Path) -> None:
        assert self._probe is not None
        try:
            exists = self._probe.is_dir(directory)
        except OSError as exc:
            raise FileIOError(str(directory), exc.strerror or str(exc)) from exc
        if not exists:
            raise MissingSubmoduleDirectory(str(directory))

    def remove_replaces(self, *modules: str) -> list[Replace]:
        """Drop local replace directives of the selected submodules.

        Only replaces whose target starts with ``.`` are removed; replaces
        pointing at other modules are left alone.  The version on the old
        side is not compared.  Returns the removed entries.
        """
        try:
            return self._remove_replaces(modules)
        except SubmodError as exc:
            exc.bind(str(self.manifest_path), modules)
            raise

    def _remove_replaces(self, modules: Sequence[str]) -> list[Replace]:
        submodules = self.submodules()
        specs = list(modules) or [r.mod.path for r in submodules]
        targets = parse_module_specs(specs)
        selected = {s.mod.path for s in submodules if contains_path(targets, s.mod.path)}

        removed: list[Replace] = []
        for r in list(self.modfile.replace):
            if r.syntax is not None and r.syntax.removed:
                continue
            if r.old.path in selected and r.new.path.startswith("."):
                logger.debug("drop replace %s", r)
                removed.extend(
                    self.modfile.drop_replace(r.old.path, r.old.version, local_only=True)
                )
        return removed

    # -- output ------------------------------------------------------------

    def format(self) -> str:
        """Canonical text of the (possibly modified) manifest."""
        return self.modfile.format()
