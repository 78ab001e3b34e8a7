"""Tests for the semantic go.mod model."""

from __future__ import annotations

import pytest

from gosubmod.domain.errors import ManifestMutationError, ManifestParseError
from gosubmod.domain.modfile import (
    auto_quote,
    is_directory_path,
    must_quote,
    parse_modfile,
)
from gosubmod.domain.modpath import ModuleVersion

FULL_MOD = """\
// Deprecated: use example.com/z
module example.com/a

go 1.21

toolchain go1.21.5

require (
\texample.com/a/b v1.0.0
\texample.com/x v1.2.3 // indirect
)

exclude example.com/x v1.0.0

replace example.com/x v1.2.3 => example.com/y v1.3.0

replace example.com/a/b => ./b

retract v0.9.0
"""


class TestParseModfile:
    def test_directives(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD)
        assert mod.module_path == "example.com/a"
        assert mod.module is not None
        assert mod.module.deprecated == "use example.com/z"
        assert mod.go == "1.21"
        assert mod.toolchain == "go1.21.5"
        assert [(r.mod.path, r.indirect) for r in mod.require] == [
            ("example.com/a/b", False),
            ("example.com/x", True),
        ]
        assert [e.mod for e in mod.exclude] == [ModuleVersion("example.com/x", "v1.0.0")]
        assert [str(r) for r in mod.replace] == [
            "example.com/x v1.2.3 => example.com/y v1.3.0",
            "example.com/a/b => ./b",
        ]
        assert [(d.verb, d.args) for d in mod.other] == [("retract", ["v0.9.0"])]

    def test_bytes_input(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD.encode("utf-8"))
        assert mod.module_path == "example.com/a"

    def test_quoted_paths_unquoted(self) -> None:
        mod = parse_modfile("go.mod", 'module "example.com/a"\n\nreplace x => "./a b"\n')
        assert mod.module_path == "example.com/a"
        assert mod.replace[0].new.path == "./a b"

    def test_format_round_trip(self) -> None:
        assert parse_modfile("go.mod", FULL_MOD).format() == FULL_MOD

    def test_missing_module_directive(self) -> None:
        mod = parse_modfile("go.mod", "go 1.21\n")
        assert mod.module is None
        assert mod.module_path == ""


class TestParseModfileErrors:
    @pytest.mark.parametrize(
        ("text", "line", "message"),
        [
            ("module example.com/a\nfoo bar\n", 2, "unknown directive: foo"),
            ("module example.com/a\nmodule example.com/b\n", 2, "repeated module statement"),
            ("module\n", 1, "usage: module module/path"),
            ("module (\n\texample.com/a\n)\n", 1, "unknown block type: module"),
            ("go 1.21\ngo 1.22\n", 2, "repeated go statement"),
            ("require example.com/b\n", 1, "usage: require module/path v1.2.3"),
            ("replace example.com/b ./b\n", 1, "usage: replace"),
            ("replace example.com/b => example.com/c\n", 1, "must be directory path"),
            ("replace example.com/b => ./c v1.0.0\n", 1, "must not have version"),
            ('replace example.com/b => "./\\q"\n', 1, "invalid escape"),
        ],
    )
    def test_errors_carry_line(self, text: str, line: int, message: str) -> None:
        with pytest.raises(ManifestParseError) as exc_info:
            parse_modfile("go.mod", text)
        assert exc_info.value.line == line
        assert message in exc_info.value.reason
        assert exc_info.value.code == "MANIFEST_PARSE_ERROR"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ManifestParseError, match="invalid UTF-8"):
            parse_modfile("go.mod", b"module example.com/\xff\n")


class TestAddReplace:
    def test_appends_after_existing_replace(self) -> None:
        mod = parse_modfile("go.mod", "module example.com/a\n\nreplace example.com/x => ./x\n")
        entry = mod.add_replace("example.com/a/b", "", "./b", "")
        assert entry.new == ModuleVersion("./b")
        assert mod.format() == (
            "module example.com/a\n"
            "\n"
            "replace example.com/x => ./x\n"
            "\n"
            "replace example.com/a/b => ./b\n"
        )

    def test_appends_into_replace_block(self) -> None:
        mod = parse_modfile(
            "go.mod",
            "module example.com/a\n\nreplace (\n\texample.com/x => ./x\n\texample.com/y => ./y\n)\n",
        )
        mod.add_replace("example.com/a/b", "", "./b", "")
        assert "\texample.com/a/b => ./b\n)" in mod.format()

    def test_updates_in_place_keeping_comments(self) -> None:
        mod = parse_modfile(
            "go.mod",
            "module example.com/a\n\n// local\nreplace example.com/a/b v1.0.0 => ../old // note\n",
        )
        mod.add_replace("example.com/a/b", "", "./b", "")
        assert len(mod.replace) == 1
        assert mod.replace[0].old == ModuleVersion("example.com/a/b")
        assert mod.format() == (
            "module example.com/a\n\n// local\nreplace example.com/a/b => ./b // note\n"
        )

    def test_removes_duplicate_replaces(self) -> None:
        mod = parse_modfile(
            "go.mod",
            "module example.com/a\n\n"
            "replace example.com/a/b v1.0.0 => ./x\n\n"
            "replace example.com/a/b v1.1.0 => ./y\n",
        )
        mod.add_replace("example.com/a/b", "", "./b", "")
        assert mod.format() == "module example.com/a\n\nreplace example.com/a/b => ./b\n"
        assert len(mod.replace) == 1

    def test_versioned_old_only_matches_same_version(self) -> None:
        mod = parse_modfile(
            "go.mod", "module example.com/a\n\nreplace example.com/a/b v1.0.0 => ./x\n"
        )
        mod.add_replace("example.com/a/b", "v2.0.0", "./b", "")
        assert [str(r) for r in mod.live_replaces()] == [
            "example.com/a/b v1.0.0 => ./x",
            "example.com/a/b v2.0.0 => ./b",
        ]

    def test_quotes_when_needed(self) -> None:
        mod = parse_modfile("go.mod", "module example.com/a\n")
        mod.add_replace("example.com/a/b", "", "./dir with space", "")
        text = mod.format()
        assert 'replace example.com/a/b => "./dir with space"\n' in text
        assert parse_modfile("go.mod", text).replace[0].new.path == "./dir with space"


class TestDropReplace:
    def test_drops_exact_match(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD)
        dropped = mod.drop_replace("example.com/a/b", "")
        assert [str(r) for r in dropped] == ["example.com/a/b => ./b"]
        assert [str(r) for r in mod.live_replaces()] == [
            "example.com/x v1.2.3 => example.com/y v1.3.0"
        ]
        assert "./b" not in mod.format()
        assert len(mod.replace) == 1

    def test_version_must_match(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD)
        with pytest.raises(ManifestMutationError, match="example.com/x not found"):
            mod.drop_replace("example.com/x", "")

    def test_local_only_keeps_module_targets(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD)
        with pytest.raises(ManifestMutationError, match="example.com/x v1.2.3 not found"):
            mod.drop_replace("example.com/x", "v1.2.3", local_only=True)
        assert [str(r) for r in mod.live_replaces()] == [
            "example.com/x v1.2.3 => example.com/y v1.3.0",
            "example.com/a/b => ./b",
        ]

    def test_already_removed_not_found(self) -> None:
        mod = parse_modfile("go.mod", FULL_MOD)
        mod.drop_replace("example.com/a/b", "")
        with pytest.raises(ManifestMutationError):
            mod.drop_replace("example.com/a/b", "")


class TestQuoting:
    @pytest.mark.parametrize(
        ("value", "quoted"),
        [
            ("./b", False),
            ("", True),
            ("a b", True),
            ('a"b', True),
            ("a//b", True),
            ("(", False),
            ("a(b", True),
            ("a\tb", True),
        ],
    )
    def test_must_quote(self, value: str, quoted: bool) -> None:
        assert must_quote(value) is quoted

    def test_auto_quote(self) -> None:
        assert auto_quote("./b") == "./b"
        assert auto_quote("./a b") == '"./a b"'

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("./b", True),
            ("../b", True),
            (".", True),
            ("/abs/b", True),
            ("C:\\b", True),
            ("example.com/b", False),
            (".b", False),
        ],
    )
    def test_is_directory_path(self, path: str, expected: bool) -> None:
        assert is_directory_path(path) is expected
