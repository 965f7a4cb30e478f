"""Semantic version parsing and index ordering.

Clean versions are compared by SemVer 2.0.0 precedence when both sides
parse (strictly, or coerced from a loose ``MAJOR[.MINOR[.PATCH]]`` form).
Anything else falls back to plain string comparison, so ordering never
raises on arbitrary input.

The mixed comparator is not transitive.  SemVer puts ``1.10.0`` before
``1.9.0``, yet string order puts ``1.9.0`` before ``1.10.0a`` and
``1.10.0a`` before ``1.10.0``.  For archives mixing SemVer and non-SemVer
clean versions the resulting order depends on enumeration order; archives
written by :func:`versionstage.core.archiver.archive_version` only hold
SemVer names and are totally ordered.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Callable, TypeVar

from pydantic import BaseModel, ConfigDict

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"

_STRICT_RE = re.compile(
    r"^[v=]?"
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    rf"(?:-(?P<prerelease>{_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

_LOOSE_RE = re.compile(r"^[v=]?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?$")

T = TypeVar("T")


class SemVer(BaseModel):
    """A parsed semantic version.  Build metadata never affects precedence."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def precedence_key(self) -> tuple:
        # A release outranks any pre-release of the same MAJOR.MINOR.PATCH.
        # Numeric identifiers rank below alphanumeric ones; a shorter list
        # ranks below a longer one with the same prefix (tuple ordering).
        pre = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0 if pre else 1, pre)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def parse(text: str) -> SemVer | None:
    """Parse a strict SemVer string (a leading ``v`` or ``=`` is tolerated)."""
    m = _STRICT_RE.match(text.strip())
    if not m:
        return None
    prerelease = m.group("prerelease")
    build = m.group("build")
    return SemVer(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def coerce(text: str) -> SemVer | None:
    """Parse strictly, else coerce a loose numeric-dotted form (``1.2`` -> ``1.2.0``)."""
    strict = parse(text)
    if strict is not None:
        return strict
    m = _LOOSE_RE.match(text.strip())
    if not m:
        return None
    return SemVer(
        major=int(m.group("major")),
        minor=int(m.group("minor") or 0),
        patch=int(m.group("patch") or 0),
    )


def compare_clean_versions(a: str, b: str) -> int:
    """Comparator placing newer versions first.

    Returns a negative number when ``a`` sorts before ``b``.
    """
    va = coerce(a)
    vb = coerce(b)
    if va is not None and vb is not None:
        ka, kb = va.precedence_key(), vb.precedence_key()
        return (ka < kb) - (ka > kb)
    return (a < b) - (a > b)


def sort_newest_first(items: list[T], key: Callable[[T], str]) -> list[T]:
    """Stable sort of ``items`` by clean version, newest first."""
    return sorted(items, key=cmp_to_key(lambda x, y: compare_clean_versions(key(x), key(y))))
