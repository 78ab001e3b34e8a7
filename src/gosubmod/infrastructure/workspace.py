"""Workspace: the manifest being edited and the disk around it.

The Workspace is the single dependency injected into every service.  It
owns the resolved manifest path and the filesystem probe, loads the
manifest into a :class:`SubmoduleFile`, and writes it back.  Nothing
below this layer looks at the current working directory.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gosubmod.domain.modfile import parse_modfile
from gosubmod.domain.submodules import (
    ManifestPredicate,
    PrefixPredicate,
    SubmoduleFile,
    SubmodulePredicate,
)
from gosubmod.infrastructure.filesystem import LocalFilesystem, read_manifest, write_manifest

if TYPE_CHECKING:
    from pathlib import Path

    from gosubmod.config.settings import GosubmodSettings
    from gosubmod.domain.submodules import DirectoryProbe

logger = logging.getLogger(__name__)


class Workspace:
    """Loads and stores the manifest named by the settings."""

    def __init__(self, settings: GosubmodSettings, *, probe: DirectoryProbe | None = None) -> None:
        self.settings = settings
        self.probe: DirectoryProbe = probe or LocalFilesystem()

    @property
    def manifest_path(self) -> Path:
        return self.settings.manifest_path

    def predicate(self) -> SubmodulePredicate:
        """The submodule detection policy selected by ``detection``."""
        if self.settings.detection == "manifest":
            return ManifestPredicate(self.manifest_path.parent, self.probe)
        return PrefixPredicate()

    def read(self) -> bytes:
        """Raw manifest content.

        Raises:
            FileIOError: if the manifest cannot be read.
        """
        logger.debug("Loading manifest %s", self.manifest_path)
        return read_manifest(self.manifest_path)

    def parse(self, data: bytes) -> SubmoduleFile:
        """Wrap manifest *data* in a configured SubmoduleFile.

        Raises:
            ManifestParseError: if it is not a valid go.mod.
        """
        path = self.manifest_path
        modfile = parse_modfile(str(path), data)
        return SubmoduleFile(
            modfile,
            path,
            strict=self.settings.strict,
            predicate=self.predicate(),
            probe=self.probe,
        )

    def load(self) -> SubmoduleFile:
        """Read and parse the manifest."""
        return self.parse(self.read())

    def save(self, submod_file: SubmoduleFile) -> str:
        """Format *submod_file* and replace the manifest with the result."""
        text = submod_file.format()
        write_manifest(submod_file.manifest_path, text)
        logger.debug("Wrote manifest %s (%d bytes)", submod_file.manifest_path, len(text))
        return text
