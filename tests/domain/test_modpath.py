"""Tests for module path validation and module spec parsing."""

from __future__ import annotations

import pytest

from gosubmod.domain.errors import InvalidModulePath
from gosubmod.domain.modpath import (
    ModuleVersion,
    canonical_version,
    check_path,
    contains_path,
    is_valid_path,
    parse_module_spec,
    parse_module_specs,
    split_path_version,
)


class TestCheckPath:
    @pytest.mark.parametrize(
        "path",
        [
            "example.com/a",
            "example.com/a/c/v2",
            "example.com/a/b_c-d~e",
            "gopkg.in/yaml.v3",
            "github.com/Org/Repo",
        ],
    )
    def test_valid(self, path: str) -> None:
        check_path(path)
        assert is_valid_path(path)

    @pytest.mark.parametrize(
        ("path", "reason"),
        [
            ("", "empty string"),
            ("-example.com/a", "leading dash"),
            ("example.com//a", "double slash"),
            ("example.com/a/", "trailing slash"),
            ("/example.com/a", "leading slash"),
            ("example/a", "missing dot in first path element"),
            ("Example.com/a", "invalid char 'E' in first path element"),
            ("example.com/./a", "invalid path element '.'"),
            ("example.com/.a", "leading dot in path element"),
            ("example.com/a.", "trailing dot in path element"),
            ("example.com/a b", "invalid char ' '"),
            ("example.com/con", "disallowed as path element component on Windows"),
            ("example.com/PROGRA~1", "trailing tilde and digits in path element"),
            ("example.com/a/v1", "invalid version"),
            ("example.com/a/v0", "invalid version"),
        ],
    )
    def test_invalid(self, path: str, reason: str) -> None:
        with pytest.raises(InvalidModulePath) as exc_info:
            check_path(path)
        assert reason in exc_info.value.reason
        assert exc_info.value.path == path
        assert exc_info.value.code == "INVALID_MODULE_PATH"
        assert not is_valid_path(path)


class TestSplitPathVersion:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("example.com/a", ("example.com/a", "", True)),
            ("example.com/a/c/v2", ("example.com/a/c", "/v2", True)),
            ("example.com/v10", ("example.com", "/v10", True)),
            ("example.com/a/v1", ("example.com/a/v1", "", False)),
            ("example.com/a/v2.1", ("example.com/a/v2.1", "", False)),
            ("example.com/a/v02", ("example.com/a/v02", "", False)),
            ("gopkg.in/yaml.v3", ("gopkg.in/yaml", ".v3", True)),
            ("gopkg.in/check.v1-unstable", ("gopkg.in/check", ".v1-unstable", True)),
            ("gopkg.in/yaml", ("gopkg.in/yaml", "", False)),
            ("v2", ("v2", "", True)),
        ],
    )
    def test_split(self, path: str, expected: tuple[str, str, bool]) -> None:
        assert split_path_version(path) == expected


class TestModuleSpecs:
    def test_bare_path(self) -> None:
        assert parse_module_spec("example.com/a/b") == ModuleVersion("example.com/a/b")

    def test_version_is_canonicalised(self) -> None:
        mv = parse_module_spec("example.com/a/c/v2@v2.1")
        assert mv == ModuleVersion("example.com/a/c/v2", "v2.1.0")
        assert str(mv) == "example.com/a/c/v2@v2.1.0"

    def test_non_semver_version_kept(self) -> None:
        assert parse_module_spec("example.com/a/b@latest").version == "latest"
        assert canonical_version("master") == "master"

    def test_empty_version_rejected(self) -> None:
        with pytest.raises(InvalidModulePath, match="empty version"):
            parse_module_spec("example.com/a/b@")

    def test_invalid_path_named(self) -> None:
        with pytest.raises(InvalidModulePath, match="'bad path'"):
            parse_module_spec("bad path@v1")

    def test_specs_keep_order(self) -> None:
        specs = parse_module_specs(["example.com/a/c/v2", "example.com/a/b@v1"])
        assert [str(s) for s in specs] == ["example.com/a/c/v2", "example.com/a/b@v1.0.0"]

    def test_specs_fail_without_partial_result(self) -> None:
        with pytest.raises(InvalidModulePath):
            parse_module_specs(["example.com/a/b", "nope"])

    def test_empty_specs(self) -> None:
        assert parse_module_specs([]) == []

    def test_contains_path_ignores_version(self) -> None:
        versions = [ModuleVersion("example.com/a/b", "v1.0.0")]
        assert contains_path(versions, "example.com/a/b")
        assert not contains_path(versions, "example.com/a")
