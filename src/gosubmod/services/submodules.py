"""SubmoduleService: list, add, drop, and fmt over the workspace manifest.

Pipeline for mutating operations: LOAD → MUTATE → FORMAT → WRITE → RESPOND.
The manifest is written only after every in-memory change succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from gosubmod.domain.errors import SubmodError
from gosubmod.services.base import BaseService
from gosubmod.services.result import ServiceResult

if TYPE_CHECKING:
    from gosubmod.domain.modfile import Replace
    from gosubmod.domain.submodules import SubmoduleFile

logger = logging.getLogger(__name__)


def _replace_item(replace: Replace) -> dict[str, str]:
    return {
        "old": str(replace.old),
        "new": replace.new.path,
        "new_version": replace.new.version,
    }


class SubmoduleService(BaseService):
    """Operations on the submodules of the workspace manifest."""

    def list_submodules(self) -> ServiceResult:
        """List detected submodules in declaration order."""
        op = "list"
        try:
            submod_file = self._workspace.load()
            items = [
                {"path": m.path, "version": m.version} for m in submod_file.list_submodules()
            ]
        except SubmodError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "manifest": str(submod_file.manifest_path),
                "module": submod_file.modfile.module_path,
                "count": len(items),
                "items": items,
            },
        )

    def add(self, modules: Sequence[str] = (), *, dry_run: bool = False) -> ServiceResult:
        """Add local replace directives for the selected submodules."""
        op = "add"
        try:
            submod_file = self._workspace.load()
            changed = submod_file.add_replaces(*modules)
            return self._commit(op, submod_file, modules, changed, dry_run=dry_run)
        except SubmodError as exc:
            return self._failure(op, exc)

    def drop(self, modules: Sequence[str] = (), *, dry_run: bool = False) -> ServiceResult:
        """Remove local replace directives of the selected submodules."""
        op = "drop"
        try:
            submod_file = self._workspace.load()
            changed = submod_file.remove_replaces(*modules)
            return self._commit(op, submod_file, modules, changed, dry_run=dry_run)
        except SubmodError as exc:
            return self._failure(op, exc)

    def fmt(self) -> ServiceResult:
        """Rewrite the manifest in canonical form."""
        op = "fmt"
        try:
            original = self._workspace.read()
            submod_file = self._workspace.parse(original)
            text = self._workspace.save(submod_file)
        except SubmodError as exc:
            return self._failure(op, exc)

        changed = original != text.encode("utf-8")
        logger.debug("Formatted %s (changed=%s)", submod_file.manifest_path, changed)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "manifest": str(submod_file.manifest_path),
                "changed": changed,
            },
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(
        self,
        op: str,
        submod_file: SubmoduleFile,
        modules: Sequence[str],
        changed: list[Replace],
        *,
        dry_run: bool,
    ) -> ServiceResult:
        warnings = _unmatched_warnings(submod_file, modules)
        if not changed:
            warnings.append("No replace directives changed")

        data: dict[str, Any] = {
            "manifest": str(submod_file.manifest_path),
            "count": len(changed),
            "replaces": [_replace_item(r) for r in changed],
            "written": False,
        }
        if dry_run:
            data["content"] = submod_file.format()
        else:
            self._workspace.save(submod_file)
            data["written"] = True

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def _unmatched_warnings(submod_file: SubmoduleFile, modules: Sequence[str]) -> list[str]:
    """Warn about requested modules that are not detected submodules."""
    known = {m.path for m in submod_file.list_submodules()}
    warnings: list[str] = []
    for spec in modules:
        path = spec.partition("@")[0]
        if path not in known:
            warnings.append(f"Not a submodule of {submod_file.modfile.module_path}: {path}")
    return warnings
