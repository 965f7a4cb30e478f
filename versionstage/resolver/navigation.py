"""Version resolution and navigation — pure functions plus pluggable strategies.

``resolve_current_version`` and ``compute_destination`` both read the page
path through :mod:`versionstage.core.version_path`, so choosing the version
the page is already on yields a destination that resolves back to it.

Navigation strategies implement the ``NavigationStrategy`` protocol:

1. ``RedirectNavigation`` — full-page redirect to the version directory.
2. ``FrameNavigation`` — loads the version's ``index.html`` into an
   embedded frame; the hosting page stays put.  An unversioned host page
   starts with the latest version in the frame.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from versionstage.core.version_path import base_path, join_version_path, version_from_path
from versionstage.models.switcher import PageContext
from versionstage.models.versions import SimplifiedIndex, SimplifiedLatest, SimplifiedRecord

UNKNOWN_VERSION = "unknown"


def resolve_current_version(page: PageContext, catalog: SimplifiedIndex) -> str:
    """Decide which version the page is showing.

    Order: version segment in the path, then the page's global, then the
    catalog's latest entry, then ``"unknown"``.
    """
    from_path = version_from_path(page.pathname)
    if from_path:
        return from_path
    if page.current_version:
        return page.current_version
    if catalog.latest is not None:
        return catalog.latest.clean_version
    return UNKNOWN_VERSION


def filter_catalog(records: list[SimplifiedRecord], query: str) -> list[SimplifiedRecord]:
    """Case-insensitive substring match on label, clean version and build date."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    return [
        r
        for r in records
        if needle in r.version.lower()
        or needle in r.clean_version.lower()
        or needle in r.build_date.lower()
    ]


def compute_destination(pathname: str, record: SimplifiedRecord | SimplifiedLatest) -> str:
    """URL path of ``record``'s directory, relative to where the page lives."""
    return join_version_path(base_path(pathname), record.path)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

@runtime_checkable
class NavigationStrategy(Protocol):
    """How a version switch is carried out."""

    def resolve_navigation_target(self, record: SimplifiedRecord, page: PageContext) -> str:
        ...

    def perform_navigation(self, target: str) -> None:
        ...

    def initial_navigation(self, catalog: SimplifiedIndex, page: PageContext) -> str | None:
        """Target to open as soon as the catalog is known, if any."""
        ...


class RedirectNavigation:
    """Leaves the page for the selected version's directory.

    Parameters
    ----------
    navigate:
        Callable that performs the redirect (the browser's location setter).
    """

    def __init__(self, navigate: Callable[[str], None]) -> None:
        self._navigate = navigate

    def resolve_navigation_target(self, record: SimplifiedRecord, page: PageContext) -> str:
        return compute_destination(page.pathname, record)

    def perform_navigation(self, target: str) -> None:
        self._navigate(target)

    def initial_navigation(self, catalog: SimplifiedIndex, page: PageContext) -> str | None:
        return None


class FrameNavigation:
    """Shows the selected version inside an embedded frame.

    Parameters
    ----------
    load_frame:
        Callable that points the frame at a URL.
    document:
        Entry document inside each version directory.
    """

    def __init__(self, load_frame: Callable[[str], None], document: str = "index.html") -> None:
        self._load_frame = load_frame
        self._document = document

    def resolve_navigation_target(self, record: SimplifiedRecord, page: PageContext) -> str:
        return compute_destination(page.pathname, record) + self._document

    def perform_navigation(self, target: str) -> None:
        self._load_frame(target)

    def initial_navigation(self, catalog: SimplifiedIndex, page: PageContext) -> str | None:
        """Latest version for an unversioned host page, else nothing."""
        if version_from_path(page.pathname) or page.current_version:
            return None
        latest = catalog.latest
        if latest is None or latest.path == ".":
            return None
        return compute_destination(page.pathname, latest) + self._document
