"""Version resolver and navigator — the version switcher without a browser.

The switcher fetches the simplified index through a ``CatalogSource``,
works out which version the hosting page shows, filters the catalog for
display, and hands selected versions to a ``NavigationStrategy``.  State
and rendering are kept apart: every view is a fresh projection.
"""

from versionstage.resolver.catalog import (
    CatalogSource,
    CatalogUnavailableError,
    FileCatalogSource,
    HttpCatalogSource,
    fallback_catalog,
)
from versionstage.resolver.host import PageHost, SwitcherAlreadyMountedError
from versionstage.resolver.navigation import (
    FrameNavigation,
    NavigationStrategy,
    RedirectNavigation,
    compute_destination,
    filter_catalog,
    resolve_current_version,
)
from versionstage.resolver.switcher import InvalidTransitionError, VersionSwitcher

__all__ = [
    "CatalogSource",
    "CatalogUnavailableError",
    "FileCatalogSource",
    "HttpCatalogSource",
    "fallback_catalog",
    "PageHost",
    "SwitcherAlreadyMountedError",
    "NavigationStrategy",
    "RedirectNavigation",
    "FrameNavigation",
    "compute_destination",
    "filter_catalog",
    "resolve_current_version",
    "InvalidTransitionError",
    "VersionSwitcher",
]
