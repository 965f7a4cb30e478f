"""Version-shaped path segments — the one place they are parsed and built.

A version segment is a whole path component, preceded by ``/``, of the form
``v?MAJOR.MINOR.PATCH`` with an optional SemVer pre-release / build suffix,
followed by ``/`` or the end of the path.  The archiver names directories
with :func:`directory_name_for`; the version switcher detects the current
version and computes navigation targets with the other helpers.  Both sides
go through this module so they agree on what counts as a version segment.

Directories are named by the raw clean version (``1.0.0``).  A ``v``
prefix is accepted when parsing, never produced.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

_SEGMENT_RE = re.compile(
    r"(?<=/)(?P<prefix>v?)"
    r"(?P<version>\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)"
    r"(?=/|$)"
)


class VersionSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    prefix: str
    start: int
    end: int


def find_version_segment(path: str) -> VersionSegment | None:
    """Return the leftmost version segment of ``path``, if any."""
    m = _SEGMENT_RE.search(path)
    if m is None:
        return None
    return VersionSegment(
        version=m.group("version"),
        prefix=m.group("prefix"),
        start=m.start(),
        end=m.end(),
    )


def version_from_path(path: str) -> str | None:
    segment = find_version_segment(path)
    return segment.version if segment else None


def is_version_segment(name: str) -> bool:
    """True if ``name`` on its own is a bare version segment (no ``v``)."""
    segment = find_version_segment(f"/{name}")
    return (
        segment is not None
        and segment.prefix == ""
        and segment.start == 1
        and segment.end == len(name) + 1
    )


def base_path(path: str) -> str:
    """Return the path that version directories hang off.

    Inside a versioned path this is everything before the version segment;
    otherwise it is the current directory.  Always ends with ``/``.
    """
    segment = find_version_segment(path)
    if segment is not None:
        return path[: segment.start]
    head, sep, _ = path.rpartition("/")
    return head + sep if sep else "/"


def join_version_path(base: str, segment: str) -> str:
    """Compose ``base`` + ``segment`` + ``/``."""
    if not base.endswith("/"):
        base += "/"
    segment = segment.strip("/")
    if not segment:
        return base
    return f"{base}{segment}/"


def strip_version_prefix(text: str) -> str:
    """Drop a leading ``v``/``V`` tag prefix: ``v1.2.0`` -> ``1.2.0``."""
    text = text.strip()
    if text[:1] in ("v", "V") and text[1:2].isdigit():
        return text[1:]
    return text


def directory_name_for(clean_version: str) -> str:
    """Archive directory name for a clean version (no ``v`` prefix)."""
    return strip_version_prefix(clean_version)
