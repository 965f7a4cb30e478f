"""Catalog sources — where the version switcher gets its SimplifiedIndex.

All sources implement the ``CatalogSource`` protocol: an async ``fetch()``
that returns a validated ``SimplifiedIndex`` or raises
``CatalogUnavailableError``.  The switcher absorbs that error and falls
back to :func:`fallback_catalog`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from versionstage.models.versions import SimplifiedIndex, SimplifiedLatest, SimplifiedRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_CANDIDATES: tuple[str, ...] = ("/versions.json", "../versions.json")

CURRENT_PAGE_LABEL = "current"


class CatalogUnavailableError(RuntimeError):
    """Raised when a catalog cannot be fetched or does not validate."""


@runtime_checkable
class CatalogSource(Protocol):
    """Protocol that every catalog source must implement."""

    async def fetch(self) -> SimplifiedIndex:
        """Return the catalog or raise ``CatalogUnavailableError``."""
        ...


def fallback_catalog() -> SimplifiedIndex:
    """Single synthetic entry standing for "this page, unlabeled"."""
    record = SimplifiedRecord(
        version=CURRENT_PAGE_LABEL,
        clean_version=CURRENT_PAGE_LABEL,
        build_date="",
        path=".",
    )
    return SimplifiedIndex(
        versions=[record],
        latest=SimplifiedLatest(
            version=record.version,
            clean_version=record.clean_version,
            path=record.path,
        ),
        count=1,
    )


def is_current_page_record(record: SimplifiedRecord) -> bool:
    """True for the synthetic entry of :func:`fallback_catalog`."""
    return record.clean_version == CURRENT_PAGE_LABEL and record.path == "."


class FileCatalogSource:
    """Reads ``versions.json`` straight from an archive on disk.

    Parameters
    ----------
    path:
        Path to the simplified index file.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def fetch(self) -> SimplifiedIndex:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return SimplifiedIndex.model_validate(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            raise CatalogUnavailableError(f"Cannot load catalog {self._path}: {exc}") from exc


class HttpCatalogSource:
    """Fetches ``versions.json`` over HTTP relative to the hosting page.

    Candidate URLs are tried in order; the first 2xx response with a valid
    payload wins.

    Parameters
    ----------
    page_url:
        Absolute URL of the page hosting the switcher.
    candidates:
        Catalog URLs, resolved against ``page_url``.
    client:
        Optional ``httpx.AsyncClient``.  When omitted a short-lived client is
        created per fetch.
    timeout:
        Request timeout in seconds for the internally created client.
    """

    def __init__(
        self,
        page_url: str,
        candidates: tuple[str, ...] = DEFAULT_CATALOG_CANDIDATES,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._page_url = httpx.URL(page_url)
        self._candidates = candidates
        self._client = client
        self._timeout = timeout

    def candidate_urls(self) -> list[httpx.URL]:
        return [self._page_url.join(c) for c in self._candidates]

    async def fetch(self) -> SimplifiedIndex:
        if self._client is not None:
            return await self._fetch_with(self._client)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._fetch_with(client)

    async def _fetch_with(self, client: httpx.AsyncClient) -> SimplifiedIndex:
        for url in self.candidate_urls():
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                logger.warning("Catalog request to %s failed: %s", url, exc)
                continue
            if not response.is_success:
                logger.warning("Catalog request to %s returned %d", url, response.status_code)
                continue
            try:
                return SimplifiedIndex.model_validate(response.json())
            except (ValueError, ValidationError) as exc:
                logger.warning("Invalid catalog payload from %s: %s", url, exc)
        raise CatalogUnavailableError(
            f"No catalog reachable from {self._page_url} "
            f"(tried {', '.join(self._candidates)})"
        )
