"""Unit tests for the archiver — copying, exclusions, metadata, overwrite protection.

Also covers clean-version normalization: every archived directory name must
be a version segment that the switcher can detect in a page path.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from versionstage.config import ArchiveSettings
from versionstage.core.archiver import (
    BuildDirectoryNotFoundError,
    InvalidVersionError,
    VersionExistsError,
    archive_version,
    build_metadata,
    normalize_clean_version,
    render_injector_script,
)
from versionstage.core.index_builder import rebuild_index
from versionstage.core.version_path import version_from_path
from versionstage.resolver.navigation import compute_destination


# ---------------------------------------------------------------------------
# Test: archiving a build
# ---------------------------------------------------------------------------


class TestArchiveVersion:
    """A build is copied under its clean version with metadata and injector."""

    def test_copies_build_into_clean_version_dir(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        result = archive_version("v1.2.0", build_dir, archive_root, settings=archive_settings)

        assert result.version_dir == archive_root.resolve() / "1.2.0"
        assert (result.version_dir / "index.html").is_file()
        assert (result.version_dir / "assets" / "app.js").is_file()
        assert result.replaced is False

    def test_excluded_entries_are_not_copied(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        result = archive_version("v1.2.0", build_dir, archive_root, settings=archive_settings)
        assert not (result.version_dir / "node_modules").exists()

    def test_writes_metadata(self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings):
        result = archive_version("v1.2.0", build_dir, archive_root, settings=archive_settings)
        raw = json.loads((result.version_dir / "version-metadata.json").read_text(encoding="utf-8"))
        assert raw["version"] == "v1.2.0"
        assert raw["cleanVersion"] == "1.2.0"
        assert raw["commit"] == "abc1234"
        assert raw["timestamp"].endswith("Z")
        assert raw["buildDate"] and raw["buildTime"]

    def test_explicit_clean_version(self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings):
        result = archive_version(
            "release-7", build_dir, archive_root, clean_version="7.0.0", settings=archive_settings
        )
        assert result.version_dir.name == "7.0.0"
        assert result.metadata.version == "release-7"

    def test_writes_injector_script(self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings):
        result = archive_version("v1.2.0", build_dir, archive_root, settings=archive_settings)
        script = (result.version_dir / "version-injector.js").read_text(encoding="utf-8")
        assert 'window.currentVersion = "1.2.0";' in script
        assert '"../version-switcher.js"' in script

    def test_archived_version_is_indexed(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        archive_version("v1.0.0", build_dir, archive_root, settings=archive_settings)
        archive_version("v1.1.0", build_dir, archive_root, settings=archive_settings)
        index, _ = rebuild_index(archive_root)
        assert [v.path for v in index.versions] == ["1.1.0", "1.0.0"]


# ---------------------------------------------------------------------------
# Test: clean-version normalization
# ---------------------------------------------------------------------------


class TestCleanVersionNormalization:
    """Directory name, metadata and injector all carry the same clean version."""

    def test_prefixed_explicit_clean_version_is_stripped(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        """A ``v`` on --clean-version must not leak into metadata or injector."""
        result = archive_version(
            "v1.2.3", build_dir, archive_root, clean_version="v1.2.3", settings=archive_settings
        )
        assert result.version_dir.name == "1.2.3"
        assert result.metadata.clean_version == "1.2.3"
        raw = json.loads((result.version_dir / "version-metadata.json").read_text(encoding="utf-8"))
        assert raw["cleanVersion"] == "1.2.3"
        script = (result.version_dir / "version-injector.js").read_text(encoding="utf-8")
        assert 'window.currentVersion = "1.2.3";' in script

    def test_loose_version_is_padded(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        result = archive_version("v1.2", build_dir, archive_root, settings=archive_settings)
        assert result.version_dir.name == "1.2.0"
        assert result.metadata.clean_version == "1.2.0"

    def test_archived_directory_is_detected_by_the_switcher(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        """Switching away from a page inside an archived version leaves that directory."""
        archive_version("v1.2", build_dir, archive_root, settings=archive_settings)
        archive_version("v2.0.0", build_dir, archive_root, settings=archive_settings)
        _, simple = rebuild_index(archive_root)
        assert [v.path for v in simple.versions] == ["2.0.0", "1.2.0"]

        page = f"/docs/{simple.versions[1].path}/index.html"
        assert version_from_path(page) == "1.2.0"
        assert compute_destination(page, simple.versions[0]) == "/docs/2.0.0/"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1.0.0", "1.0.0"),
            ("v3.1.4", "3.1.4"),
            ("V2", "2.0.0"),
            ("1.0.0-rc.1", "1.0.0-rc.1"),
            ("v1.0.0+build.7", "1.0.0+build.7"),
        ],
    )
    def test_normalize(self, raw: str, expected: str):
        assert normalize_clean_version(raw) == expected

    @pytest.mark.parametrize("raw", ["latest", "release-7", "", "1.2.3.4", "../victim", "..", "1.0.0/.."])
    def test_normalize_rejects_non_versions(self, raw: str):
        with pytest.raises(InvalidVersionError):
            normalize_clean_version(raw)


# ---------------------------------------------------------------------------
# Test: fatal conditions
# ---------------------------------------------------------------------------


class TestArchiveErrors:
    """Fatal conditions are raised before anything is written."""

    def test_missing_build_dir(self, tmp_path: Path, archive_root: Path, archive_settings: ArchiveSettings):
        with pytest.raises(BuildDirectoryNotFoundError):
            archive_version("v1.0.0", tmp_path / "nope", archive_root, settings=archive_settings)
        assert not archive_root.exists()

    def test_existing_version_requires_force(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        first = archive_version("v1.0.0", build_dir, archive_root, settings=archive_settings)
        marker = first.version_dir / "marker.txt"
        marker.write_text("keep", encoding="utf-8")

        with pytest.raises(VersionExistsError):
            archive_version("v1.0.0", build_dir, archive_root, settings=archive_settings)
        assert marker.read_text(encoding="utf-8") == "keep"

    def test_force_replaces_existing_version(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        first = archive_version("v1.0.0", build_dir, archive_root, settings=archive_settings)
        (first.version_dir / "stale.txt").write_text("old", encoding="utf-8")

        second = archive_version("v1.0.0", build_dir, archive_root, force=True, settings=archive_settings)
        assert second.replaced is True
        assert not (second.version_dir / "stale.txt").exists()
        assert (second.version_dir / "index.html").is_file()

    def test_archive_inside_build_is_not_copied_into_itself(
        self, tmp_path: Path, archive_settings: ArchiveSettings
    ):
        site = tmp_path / "site"
        site.mkdir()
        (site / "index.html").write_text("site", encoding="utf-8")
        releases = site / "releases"

        result = archive_version("v1.0.0", site, releases, settings=archive_settings)
        assert (result.version_dir / "index.html").is_file()
        assert not (result.version_dir / "releases").exists()

    @pytest.mark.parametrize("hostile", ["../victim", ".."])
    def test_path_escaping_version_never_touches_siblings(
        self, hostile: str, build_dir: Path, tmp_path: Path, archive_settings: ArchiveSettings
    ):
        """Even with force, a version naming a path outside the archive is rejected."""
        site = tmp_path / "site"
        archive = site / "versions"
        archive.mkdir(parents=True)
        victim = site / "victim"
        victim.mkdir()
        (victim / "precious.txt").write_text("keep", encoding="utf-8")

        with pytest.raises(InvalidVersionError):
            archive_version(hostile, build_dir, archive, force=True, settings=archive_settings)
        with pytest.raises(InvalidVersionError):
            archive_version(
                "v1.0.0", build_dir, archive, clean_version=hostile, force=True, settings=archive_settings
            )

        assert (victim / "precious.txt").read_text(encoding="utf-8") == "keep"
        assert list(archive.iterdir()) == []

    def test_non_version_name_is_rejected(
        self, build_dir: Path, archive_root: Path, archive_settings: ArchiveSettings
    ):
        with pytest.raises(InvalidVersionError):
            archive_version("latest", build_dir, archive_root, settings=archive_settings)
        assert not archive_root.exists()


# ---------------------------------------------------------------------------
# Test: metadata helpers
# ---------------------------------------------------------------------------


class TestMetadataHelpers:
    def test_build_metadata_uses_settings(self, archive_settings: ArchiveSettings):
        moment = datetime(2024, 3, 9, 12, 30, 0, tzinfo=timezone.utc)
        meta = build_metadata("v2.0.0", "2.0.0", settings=archive_settings, now=moment)
        assert meta.timestamp == "2024-03-09T12:30:00Z"
        assert meta.commit == "abc1234"

    def test_injector_escapes_version(self, archive_settings: ArchiveSettings):
        script = render_injector_script('1.0.0"; alert(1); "', settings=archive_settings)
        assert '\\"; alert(1); \\"' in script
