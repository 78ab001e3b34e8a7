"""Filesystem operations for manifest handling.

INVARIANT: A manifest is replaced as a whole.  Content is written to a
temporary file in the same directory and renamed over the original, so a
failed write leaves the previous manifest untouched.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from gosubmod.domain.errors import FileIOError


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_manifest(path: Path) -> bytes:
    """Read the whole manifest at *path*."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileIOError(str(path), _reason(exc)) from exc


def write_manifest(path: Path, content: str) -> None:
    """Atomically replace *path* with *content*.

    The file keeps its permission bits when it already exists.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = 0o644
    except OSError as exc:
        raise FileIOError(str(path), _reason(exc)) from exc

    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise FileIOError(str(path), _reason(exc)) from exc


# ---------------------------------------------------------------------------
# Directory probe
# ---------------------------------------------------------------------------


class LocalFilesystem:
    """:class:`~gosubmod.domain.submodules.DirectoryProbe` on the real disk.

    Missing paths, or a file where a directory was expected, answer False.
    Any other ``OSError`` propagates.
    """

    def is_dir(self, path: Path) -> bool:
        try:
            return stat.S_ISDIR(path.stat().st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False

    def is_file(self, path: Path) -> bool:
        try:
            return stat.S_ISREG(path.stat().st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False
