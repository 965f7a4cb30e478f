"""Version archiver — copies a build into ``{archive_root}/{clean_version}/``.

Each archived version directory receives:

- a copy of the build output (minus excluded entries),
- ``version-metadata.json`` read back by the index builder,
- ``version-injector.js`` which tells the version switcher which version a
  page belongs to and loads the switcher assets.

Every fatal condition (invalid version, missing build directory, version
already archived without ``force``) is checked before anything is written.
The clean version is normalized to a bare SemVer string so the directory
name is always a version segment the switcher recognizes.
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from versionstage.config import ArchiveSettings, settings as default_settings
from versionstage.core.semver import coerce
from versionstage.core.version_path import (
    directory_name_for,
    is_version_segment,
    strip_version_prefix,
)
from versionstage.models.versions import VersionMetadata

logger = logging.getLogger(__name__)


class InvalidVersionError(RuntimeError):
    """Raised when a version cannot name an archive directory."""


class BuildDirectoryNotFoundError(RuntimeError):
    """Raised when the build output to archive does not exist."""


class VersionExistsError(RuntimeError):
    """Raised when the target version is already archived and force is off."""


class ArchiveResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    version_dir: Path
    metadata: VersionMetadata
    replaced: bool = False


_INJECTOR_TEMPLATE = """\
(function() {{
  if (typeof window !== 'undefined' && !window.versionSwitcherInjected) {{
    window.versionSwitcherInjected = true;
    window.currentVersion = {version};

    var script = document.createElement('script');
    script.src = {script_url};
    script.async = true;
    document.head.appendChild(script);

    var link = document.createElement('link');
    link.rel = 'stylesheet';
    link.href = {stylesheet_url};
    document.head.appendChild(link);
  }}
}})();
"""


def build_metadata(
    version: str,
    clean_version: str,
    *,
    settings: ArchiveSettings | None = None,
    now: datetime | None = None,
) -> VersionMetadata:
    cfg = settings or default_settings
    moment = now or datetime.now(timezone.utc)
    local = moment.astimezone()
    return VersionMetadata(
        version=version,
        clean_version=clean_version,
        timestamp=moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        commit=cfg.commit_sha or "unknown",
        build_date=local.strftime(cfg.date_format),
        build_time=local.strftime(cfg.time_format),
    )


def render_injector_script(clean_version: str, *, settings: ArchiveSettings | None = None) -> str:
    cfg = settings or default_settings
    # json.dumps yields valid, escaped JavaScript string literals.
    return _INJECTOR_TEMPLATE.format(
        version=json.dumps(clean_version),
        script_url=json.dumps(cfg.switcher_script_url),
        stylesheet_url=json.dumps(cfg.switcher_stylesheet_url),
    )


def normalize_clean_version(text: str) -> str:
    """Canonical clean version for ``text``: ``v1.2`` -> ``1.2.0``.

    Raises
    ------
    InvalidVersionError
        If ``text`` is not a SemVer (or loose numeric) version.
    """
    parsed = coerce(strip_version_prefix(text))
    if parsed is None:
        raise InvalidVersionError(f"Not a semantic version: {text!r}")
    clean = str(parsed)
    if not is_version_segment(clean):
        raise InvalidVersionError(f"Version {text!r} cannot name an archive directory")
    return clean


def _ignore_for(excluded: set[str], archive_root: Path):
    def _ignore(directory: str, names: list[str]) -> set[str]:
        skipped = {n for n in names if n in excluded}
        # Never copy the archive into itself when it lives inside the build.
        skipped.update(
            n for n in names if (Path(directory) / n).resolve() == archive_root
        )
        for name in sorted(skipped):
            logger.debug("Skipping excluded entry: %s", Path(directory) / name)
        return skipped

    return _ignore


def archive_version(
    version: str,
    build_dir: Path,
    archive_root: Path,
    *,
    clean_version: str | None = None,
    force: bool = False,
    settings: ArchiveSettings | None = None,
) -> ArchiveResult:
    """Copy ``build_dir`` into the archive as ``version``.

    ``clean_version`` defaults to ``version``; either way it is normalized
    with :func:`normalize_clean_version`.

    Raises
    ------
    InvalidVersionError
        If the clean version is not a version segment.
    BuildDirectoryNotFoundError
        If ``build_dir`` is not a directory.
    VersionExistsError
        If the version directory already exists and ``force`` is False.
    """
    cfg = settings or default_settings
    clean = normalize_clean_version(clean_version or version)
    build_dir = Path(build_dir).resolve()
    archive_root = Path(archive_root).resolve()
    version_dir = archive_root / directory_name_for(clean)

    if version_dir.resolve().parent != archive_root:
        raise InvalidVersionError(f"Version directory {version_dir} escapes {archive_root}")
    if not build_dir.is_dir():
        raise BuildDirectoryNotFoundError(f"Build directory does not exist: {build_dir}")

    replaced = version_dir.exists()
    if replaced and not force:
        raise VersionExistsError(
            f"Version {version} is already archived at {version_dir}; use force to overwrite"
        )

    logger.info("Archiving version %s from %s to %s", version, build_dir, version_dir)
    if replaced:
        logger.info("Removing existing archive of %s", version)
        shutil.rmtree(version_dir)

    shutil.copytree(
        build_dir,
        version_dir,
        ignore=_ignore_for(set(cfg.exclude_dirs), archive_root),
    )

    metadata = build_metadata(version, clean, settings=cfg)
    (version_dir / cfg.metadata_filename).write_text(
        json.dumps(metadata.to_json_dict(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    (version_dir / cfg.injector_filename).write_text(
        render_injector_script(clean, settings=cfg), encoding="utf-8"
    )

    logger.info("Version %s archived", version)
    return ArchiveResult(version_dir=version_dir, metadata=metadata, replaced=replaced)
