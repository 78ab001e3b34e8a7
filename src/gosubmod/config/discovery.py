"""Locate gosubmod.toml.

``GOSUBMOD_CONFIG`` names the file outright; otherwise the nearest
``gosubmod.toml`` in the start directory or one of its parents wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "gosubmod.toml"
CONFIG_ENV_VAR = "GOSUBMOD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    A ``GOSUBMOD_CONFIG`` pointing at a missing file disables discovery.
    """
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
