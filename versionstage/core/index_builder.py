"""Version index builder — scan, order, project, persist.

Layout under the archive root::

    {archive_root}/
        index.json          — full VersionIndex
        versions.json       — SimplifiedIndex (fetched by the version switcher)
        index.html          — landing page
        {clean_version}/
            version-metadata.json
            ...build output...

A rebuild re-derives every record from the per-version metadata files and
replaces the index files wholesale.  Malformed entries are skipped with a
warning; nothing in this module raises for data problems.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from versionstage.config import ArchiveSettings, settings as default_settings
from versionstage.core.semver import sort_newest_first
from versionstage.models.versions import (
    IndexDelta,
    SimplifiedIndex,
    VersionIndex,
    VersionMetadata,
    VersionRecord,
)
from versionstage.render.landing import render_landing_page

logger = logging.getLogger(__name__)


class IndexArtifacts(BaseModel):
    """Paths written by :func:`write_index_artifacts`."""

    model_config = ConfigDict(frozen=True)

    index_path: Path
    simple_index_path: Path
    landing_path: Path


class IndexUpdateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: VersionIndex
    simple: SimplifiedIndex
    delta: IndexDelta
    artifacts: IndexArtifacts


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def read_metadata(version_dir: Path, metadata_filename: str) -> VersionMetadata | None:
    """Read one version's metadata file; ``None`` if absent or malformed."""
    metadata_path = version_dir / metadata_filename
    if not metadata_path.is_file():
        logger.debug("No metadata in %s, skipping.", version_dir.name)
        return None
    try:
        raw = json.loads(metadata_path.read_text(encoding="utf-8"))
        return VersionMetadata.model_validate(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Unreadable version metadata in '%s': %s", version_dir.name, exc)
        return None


def scan_archive(archive_root: Path, *, settings: ArchiveSettings | None = None) -> list[VersionRecord]:
    """Collect a record for every version directory, in enumeration order."""
    cfg = settings or default_settings
    archive_root = Path(archive_root)
    if not archive_root.is_dir():
        logger.info("Archive root %s does not exist; treating as empty.", archive_root)
        return []

    records: list[VersionRecord] = []
    for entry in sorted(archive_root.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or entry.name == cfg.vcs_dir:
            continue
        metadata = read_metadata(entry, cfg.metadata_filename)
        if metadata is None:
            continue
        records.append(VersionRecord.from_metadata(metadata, path=entry.name))
    return records


def load_existing_index(index_path: Path) -> VersionIndex | None:
    """Load a previously written full index.

    Returns ``None`` when the file is missing or cannot be parsed; an
    unparsable index is discarded, never repaired.
    """
    if not index_path.is_file():
        return None
    try:
        return VersionIndex.model_validate_json(index_path.read_bytes())
    except (OSError, ValidationError) as exc:
        logger.warning("Discarding unreadable index %s: %s", index_path, exc)
        return None


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def rebuild_index(
    archive_root: Path,
    *,
    settings: ArchiveSettings | None = None,
) -> tuple[VersionIndex, SimplifiedIndex]:
    """Scan ``archive_root`` and return the full and simplified indexes.

    Records are ordered newest first by clean version (see
    :mod:`versionstage.core.semver`); equal clean versions keep their
    directory enumeration order.
    """
    records = scan_archive(archive_root, settings=settings)
    ordered = sort_newest_first(records, key=lambda r: r.clean_version)
    index = VersionIndex.from_records(ordered)
    return index, SimplifiedIndex.from_index(index)


def compute_delta(previous: VersionIndex | None, current: VersionIndex) -> IndexDelta:
    before = {v.clean_version for v in previous.versions} if previous else set()
    after = [v.clean_version for v in current.versions]
    return IndexDelta(
        added=[v for v in after if v not in before],
        removed=sorted(before - set(after)),
    )


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _write_json(path: Path, data: dict) -> None:
    # Write beside the target, then swap it into place.
    tmp = path.with_name(f".{path.name}.tmp")
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    os.replace(tmp, path)


def _from_archive_root(url: str) -> str:
    # Switcher asset URLs are relative to a version directory, one level down.
    return url[3:] if url.startswith("../") else url


def write_index_artifacts(
    archive_root: Path,
    index: VersionIndex,
    simple: SimplifiedIndex,
    *,
    settings: ArchiveSettings | None = None,
) -> IndexArtifacts:
    """Persist the full index, the simplified index, and the landing page."""
    cfg = settings or default_settings
    archive_root = Path(archive_root)
    archive_root.mkdir(parents=True, exist_ok=True)

    index_path = archive_root / cfg.index_filename
    simple_path = archive_root / cfg.simple_index_filename
    landing_path = archive_root / cfg.landing_filename

    _write_json(index_path, index.to_json_dict())
    _write_json(simple_path, simple.to_json_dict())
    landing_path.write_text(
        render_landing_page(
            simple,
            script_url=_from_archive_root(cfg.switcher_script_url),
            stylesheet_url=_from_archive_root(cfg.switcher_stylesheet_url),
        ),
        encoding="utf-8",
    )

    logger.debug("Wrote %s, %s and %s", index_path, simple_path, landing_path)
    return IndexArtifacts(
        index_path=index_path,
        simple_index_path=simple_path,
        landing_path=landing_path,
    )


def update_index(
    archive_root: Path,
    *,
    settings: ArchiveSettings | None = None,
) -> IndexUpdateResult:
    """Rebuild and persist every index artifact for ``archive_root``."""
    cfg = settings or default_settings
    archive_root = Path(archive_root)

    previous = load_existing_index(archive_root / cfg.index_filename)
    index, simple = rebuild_index(archive_root, settings=cfg)
    delta = compute_delta(previous, index)
    artifacts = write_index_artifacts(archive_root, index, simple, settings=cfg)

    logger.info(
        "Version index updated: %d version(s), latest=%s",
        index.count,
        index.latest.version if index.latest else "none",
    )
    if delta.changed:
        logger.info("Added: %s; removed: %s", delta.added or "-", delta.removed or "-")

    return IndexUpdateResult(index=index, simple=simple, delta=delta, artifacts=artifacts)
