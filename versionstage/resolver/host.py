"""Page host — the composition root that owns the single version switcher.

A page mounts at most one switcher.  Code that needs the switcher receives
the handle from the host instead of consulting a global flag.
"""

from __future__ import annotations

import logging

from versionstage.models.switcher import PageContext
from versionstage.resolver.catalog import CatalogSource
from versionstage.resolver.navigation import NavigationStrategy
from versionstage.resolver.switcher import VersionSwitcher

logger = logging.getLogger(__name__)


class SwitcherAlreadyMountedError(RuntimeError):
    """Raised when a second switcher is mounted on the same page."""


class PageHost:
    """Owns the page context and the (single) switcher mounted on it.

    Parameters
    ----------
    page:
        Location path and current-version global of the hosting page.
    """

    def __init__(self, page: PageContext) -> None:
        self._page = page
        self._switcher: VersionSwitcher | None = None

    @property
    def page(self) -> PageContext:
        return self._page

    @property
    def is_mounted(self) -> bool:
        return self._switcher is not None

    @property
    def switcher(self) -> VersionSwitcher:
        if self._switcher is None:
            raise LookupError("No version switcher mounted on this page")
        return self._switcher

    def mount(self, source: CatalogSource, strategy: NavigationStrategy) -> VersionSwitcher:
        """Construct the page's switcher.  Raises if one already exists."""
        if self._switcher is not None:
            raise SwitcherAlreadyMountedError(
                f"A version switcher is already mounted on {self._page.pathname}"
            )
        self._switcher = VersionSwitcher(source, strategy, self._page)
        logger.debug("Mounted version switcher on %s", self._page.pathname)
        return self._switcher
