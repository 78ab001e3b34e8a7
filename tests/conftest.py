"""Shared pytest fixtures and test helpers for gosubmod tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

MOD_WITHOUT_REPLACES = """\
module example.com/a

require (
\texample.com/a/b v1.0.0
\texample.com/a/c/v2 v2.0.0
)
"""

MOD_WITH_REPLACES = """\
module example.com/a

require (
\texample.com/a/b v1.0.0
\texample.com/a/c/v2 v2.0.0
)

replace example.com/a/b => ./b

replace example.com/a/c/v2 => ./c
"""

MOD_REPLACES_FIRST = """\
module example.com/a

replace example.com/a/b => ./b
replace example.com/a/c/v2 => ./c

require (
\texample.com/a/b v1.0.0
\texample.com/a/c/v2 v2.0.0
)
"""


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Hide GOSUBMOD_* variables and restore logging after each test."""
    import os

    for name in list(os.environ):
        if name.startswith("GOSUBMOD_"):
            monkeypatch.delenv(name)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("gosubmod")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def module_root(tmp_path: Path) -> Path:
    """Module ``example.com/a`` with submodule directories ``b`` and ``c``.

    This is the single source of truth for the module directory layout.
    """
    (tmp_path / "b").mkdir()
    (tmp_path / "c").mkdir()
    (tmp_path / "go.mod").write_text(MOD_WITHOUT_REPLACES, encoding="utf-8")
    return tmp_path


@pytest.fixture
def _isolated_module(module_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp module root so the CLI edits its go.mod.

    Use via ``@pytest.mark.usefixtures("_isolated_module")`` on command test
    classes.
    """
    monkeypatch.chdir(module_root)


def read_mod(root: Path) -> str:
    return (root / "go.mod").read_text(encoding="utf-8")
