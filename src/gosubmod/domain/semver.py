"""Go-flavoured semantic versions.

Go accepts the shorthands ``v1`` and ``v1.2`` as ``v1.0.0`` and ``v1.2.0``
and always requires the leading ``v``.  Pseudo-versions
(``v0.0.0-20191109021931-daa7c04131f5``) are ordinary prerelease versions.
"""

from __future__ import annotations

import re

_NUM = r"0|[1-9][0-9]*"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"

_SEMVER = re.compile(
    rf"^v(?P<major>{_NUM})"
    rf"(?:\.(?P<minor>{_NUM})"
    rf"(?:\.(?P<patch>{_NUM})"
    rf"(?P<prerelease>-{_PRE_IDENT}(?:\.{_PRE_IDENT})*)?"
    rf"(?P<build>\+{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*)?"
    r")?)?$"
)

INCOMPATIBLE = "+incompatible"


def _match(v: str) -> re.Match[str] | None:
    return _SEMVER.match(v)


def is_valid(v: str) -> bool:
    """Whether *v* is a valid Go semantic version (shorthands included)."""
    return _match(v) is not None


def build(v: str) -> str:
    """The ``+build`` suffix of *v*, or ``""``."""
    m = _match(v)
    if m is None:
        return ""
    return m.group("build") or ""


def prerelease(v: str) -> str:
    """The ``-prerelease`` suffix of *v*, or ``""``."""
    m = _match(v)
    if m is None:
        return ""
    return m.group("prerelease") or ""


def major(v: str) -> str:
    """The ``vN`` major prefix of *v*, or ``""``."""
    m = _match(v)
    if m is None:
        return ""
    return f"v{m.group('major')}"


def canonical(v: str) -> str:
    """Canonical form of *v*, or ``""`` if it is not a valid version.

    Build metadata is dropped and shorthands are expanded::

        >>> canonical("v1.2")
        'v1.2.0'
        >>> canonical("v1.2.3+meta")
        'v1.2.3'
    """
    m = _match(v)
    if m is None:
        return ""
    if m.group("minor") is None:
        return f"{v}.0.0"
    if m.group("patch") is None:
        return f"{v}.0"
    if m.group("build"):
        return v[: -len(m.group("build"))]
    return v


def canonical_module_version(v: str) -> str:
    """Like :func:`canonical` but keeps the ``+incompatible`` marker."""
    cv = canonical(v)
    if build(v) == INCOMPATIBLE:
        cv += INCOMPATIBLE
    return cv
