"""Tests for Go-flavoured semantic versions."""

from __future__ import annotations

import pytest

from gosubmod.domain import semver


class TestCanonical:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("v1", "v1.0.0"),
            ("v1.2", "v1.2.0"),
            ("v1.2.3", "v1.2.3"),
            ("v1.2.3+meta", "v1.2.3"),
            ("v1.2.3-pre+meta", "v1.2.3-pre"),
            ("v0.0.0-20191109021931-daa7c04131f5", "v0.0.0-20191109021931-daa7c04131f5"),
        ],
    )
    def test_valid(self, version: str, expected: str) -> None:
        assert semver.canonical(version) == expected

    @pytest.mark.parametrize(
        "version",
        ["", "1.2.3", "v01.2.3", "v1.02", "v1.2.3-01", "v1+meta", "v1.2.3.4", "latest"],
    )
    def test_invalid_is_empty(self, version: str) -> None:
        assert semver.canonical(version) == ""
        assert semver.is_valid(version) is False

    def test_module_version_keeps_incompatible(self) -> None:
        assert semver.canonical_module_version("v2.0.0+incompatible") == "v2.0.0+incompatible"
        assert semver.canonical_module_version("v2.0.0+other") == "v2.0.0"


class TestParts:
    def test_prerelease(self) -> None:
        assert semver.prerelease("v1.2.3-pre.1+b") == "-pre.1"
        assert semver.prerelease("v1.2.3") == ""

    def test_build(self) -> None:
        assert semver.build("v1.2.3+b.7") == "+b.7"
        assert semver.build("nope") == ""

    def test_major(self) -> None:
        assert semver.major("v2.3.4") == "v2"
        assert semver.major("v0") == "v0"
        assert semver.major("2.3.4") == ""
