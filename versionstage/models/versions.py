"""Version index models — metadata, records, full and simplified indexes.

Python attributes are snake_case; the persisted JSON uses camelCase
(``cleanVersion``, ``buildDate``, ``buildTime``).  Models accept either
spelling on input and always dump by alias.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class _JsonModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        """Dump with camelCase keys, ready for ``json.dumps``."""
        return self.model_dump(mode="json", by_alias=True)


class VersionMetadata(_JsonModel):
    """Contents of the per-version metadata file written at archive time."""

    version: str
    clean_version: str
    timestamp: str = ""
    commit: str = "unknown"
    build_date: str = ""
    build_time: str = ""


class VersionRecord(VersionMetadata):
    """One archived build.

    ``path`` is the directory name of the build relative to the archive root.
    """

    path: str

    @classmethod
    def from_metadata(cls, metadata: VersionMetadata, path: str) -> VersionRecord:
        return cls(**metadata.model_dump(), path=path)


class VersionIndex(_JsonModel):
    """The full persisted index, newest version first."""

    versions: list[VersionRecord] = Field(default_factory=list)
    latest: VersionRecord | None = None
    updated: str = Field(default_factory=_utc_now_iso)
    count: int = 0

    @classmethod
    def from_records(cls, records: list[VersionRecord]) -> VersionIndex:
        """Build an index from records that are already in index order."""
        return cls(
            versions=list(records),
            latest=records[0] if records else None,
            count=len(records),
        )


class SimplifiedRecord(_JsonModel):
    """Reduced record fetched by the version switcher on every page load."""

    version: str
    clean_version: str
    build_date: str = ""
    path: str


class SimplifiedLatest(_JsonModel):
    version: str
    clean_version: str
    path: str


class SimplifiedIndex(_JsonModel):
    """Field projection of :class:`VersionIndex` — same order, fewer fields.

    This is the only shape the version switcher depends on.
    """

    versions: list[SimplifiedRecord] = Field(default_factory=list)
    latest: SimplifiedLatest | None = None
    count: int = 0

    @model_validator(mode="before")
    @classmethod
    def _default_count(cls, data: Any) -> Any:
        if isinstance(data, dict) and "count" not in data:
            data = {**data, "count": len(data.get("versions") or [])}
        return data

    @classmethod
    def from_index(cls, index: VersionIndex) -> SimplifiedIndex:
        latest = None
        if index.latest is not None:
            latest = SimplifiedLatest(
                version=index.latest.version,
                clean_version=index.latest.clean_version,
                path=index.latest.path,
            )
        return cls(
            versions=[
                SimplifiedRecord(
                    version=v.version,
                    clean_version=v.clean_version,
                    build_date=v.build_date,
                    path=v.path,
                )
                for v in index.versions
            ],
            latest=latest,
            count=len(index.versions),
        )


class IndexDelta(BaseModel):
    """Clean versions added or removed relative to the previous index."""

    model_config = ConfigDict(frozen=True)

    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)
