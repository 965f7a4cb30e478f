"""Shared test fixtures for versionstage."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from versionstage.config import ArchiveSettings
from versionstage.models.switcher import PageContext
from versionstage.models.versions import SimplifiedIndex, SimplifiedLatest, SimplifiedRecord
from versionstage.resolver.catalog import CatalogUnavailableError


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """Provide a (not yet created) archive root in a temp directory."""
    return tmp_path / "versions"


@pytest.fixture
def archive_settings(monkeypatch: pytest.MonkeyPatch) -> ArchiveSettings:
    """Provide settings unaffected by the caller's environment."""
    monkeypatch.delenv("GITHUB_SHA", raising=False)
    monkeypatch.delenv("VERSIONSTAGE_COMMIT_SHA", raising=False)
    return ArchiveSettings(commit_sha="abc1234")


@pytest.fixture
def make_version_dir(archive_root: Path) -> Callable[..., Path]:
    """Factory fixture: create a version directory with a metadata file."""

    def _factory(name: str, clean_version: str | None = None, **overrides: Any) -> Path:
        clean = clean_version or name
        version_dir = archive_root / name
        version_dir.mkdir(parents=True, exist_ok=True)
        metadata: dict[str, Any] = {
            "version": f"v{clean}",
            "cleanVersion": clean,
            "timestamp": "2024-01-15T10:00:00.000Z",
            "commit": "abc1234",
            "buildDate": "2024/1/15",
            "buildTime": "10:00:00",
        }
        metadata.update(overrides)
        (version_dir / "version-metadata.json").write_text(
            json.dumps(metadata), encoding="utf-8"
        )
        return version_dir

    return _factory


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Provide a small build output tree."""
    root = tmp_path / "dist-out"
    (root / "assets").mkdir(parents=True)
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "index.html").write_text("<html><body>app</body></html>", encoding="utf-8")
    (root / "assets" / "app.js").write_text("console.log('app');", encoding="utf-8")
    (root / "node_modules" / "left-pad" / "index.js").write_text("", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Switcher helpers
# ---------------------------------------------------------------------------


def _make_catalog(*clean_versions: str) -> SimplifiedIndex:
    """Build a SimplifiedIndex whose records are in the given order."""
    records = [
        SimplifiedRecord(
            version=f"v{clean}",
            clean_version=clean,
            build_date="2024/1/15",
            path=clean,
        )
        for clean in clean_versions
    ]
    latest = None
    if records:
        latest = SimplifiedLatest(
            version=records[0].version,
            clean_version=records[0].clean_version,
            path=records[0].path,
        )
    return SimplifiedIndex(versions=records, latest=latest, count=len(records))


class StaticCatalogSource:
    """Catalog source that always returns the same index."""

    def __init__(self, catalog: SimplifiedIndex) -> None:
        self.catalog = catalog
        self.calls = 0

    async def fetch(self) -> SimplifiedIndex:
        self.calls += 1
        return self.catalog


class FailingCatalogSource:
    """Catalog source that is never reachable."""

    async def fetch(self) -> SimplifiedIndex:
        raise CatalogUnavailableError("offline")


@pytest.fixture
def catalog() -> SimplifiedIndex:
    return _make_catalog("2.0.0", "1.1.0", "1.0.0")


@pytest.fixture
def versioned_page() -> PageContext:
    return PageContext(pathname="/docs/1.1.0/index.html")


@pytest.fixture
def navigations() -> list[str]:
    """Collects every URL a navigation strategy was asked to open."""
    return []


@pytest.fixture
def make_catalog() -> Callable[..., SimplifiedIndex]:
    """Factory fixture: SimplifiedIndex from clean versions, in the given order."""
    return _make_catalog


@pytest.fixture
def make_source() -> Callable[[SimplifiedIndex], StaticCatalogSource]:
    """Factory fixture: a catalog source serving a fixed index."""
    return StaticCatalogSource


@pytest.fixture
def failing_source() -> FailingCatalogSource:
    return FailingCatalogSource()
