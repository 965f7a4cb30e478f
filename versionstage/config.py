"""Archive configuration — env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
VERSIONSTAGE_* environment variables. The commit identifier additionally
falls back to ``GITHUB_SHA`` so archive runs inside CI pick it up unchanged.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "archive",
    "node_modules",
    ".git",
    ".github",
    ".version-archive-tools",
    "dist",
    "build",
)


class ArchiveSettings(BaseSettings):
    """Archive layout and build metadata settings.

    All settings can be overridden via VERSIONSTAGE_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export VERSIONSTAGE_ARCHIVE_DIR=public/versions
        export VERSIONSTAGE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VERSIONSTAGE_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Archive layout
    archive_dir: Path = Path("archive/versions")
    metadata_filename: str = "version-metadata.json"
    index_filename: str = "index.json"
    simple_index_filename: str = "versions.json"
    landing_filename: str = "index.html"
    injector_filename: str = "version-injector.js"
    vcs_dir: str = ".git"

    # Copy exclusions (matched against entry names at every level)
    exclude_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))

    # Build metadata
    commit_sha: str = Field(
        default="unknown",
        validation_alias=AliasChoices("VERSIONSTAGE_COMMIT_SHA", "GITHUB_SHA"),
    )
    date_format: str = "%Y/%m/%d"
    time_format: str = "%H:%M:%S"

    # Switcher assets referenced by the injector script
    switcher_script_url: str = "../version-switcher.js"
    switcher_stylesheet_url: str = "../version-switcher.css"

    # Observability
    log_level: str = "INFO"


# Module-level singleton: import as `from versionstage.config import settings`
settings = ArchiveSettings()
