"""Version switcher — catalog, current version, filter and navigation state.

Lifecycle for one page load::

    UNINITIALIZED --load_catalog()--> CATALOG_LOADED | CATALOG_UNAVAILABLE
                  --> READY --resolve()--> VERSION_KNOWN --select()--> NAVIGATED

Within VERSION_KNOWN the dropdown is open or closed.  Rendering is a pure
projection (:meth:`VersionSwitcher.view`) regenerated after every change;
the catalog itself is never mutated once loaded.
"""

from __future__ import annotations

import logging

from versionstage.models.switcher import (
    VALID_TRANSITIONS,
    PageContext,
    SwitcherItem,
    SwitcherState,
    SwitcherView,
)
from versionstage.models.versions import SimplifiedIndex, SimplifiedRecord
from versionstage.resolver.catalog import (
    CatalogSource,
    CatalogUnavailableError,
    fallback_catalog,
    is_current_page_record,
)
from versionstage.resolver.navigation import (
    NavigationStrategy,
    filter_catalog,
    resolve_current_version,
)

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when an operation is not allowed in the switcher's current state."""


class VersionSwitcher:
    """Browser-independent core of the version switcher.

    Parameters
    ----------
    source:
        Where the catalog is fetched from.
    strategy:
        How a selected version is navigated to.
    page:
        The hosting page's location path and current-version global.
    """

    def __init__(
        self,
        source: CatalogSource,
        strategy: NavigationStrategy,
        page: PageContext,
    ) -> None:
        self._source = source
        self._strategy = strategy
        self._page = page
        self._state = SwitcherState.UNINITIALIZED
        self._catalog = SimplifiedIndex()
        self._current_version: str | None = None
        self._is_open = False
        self._query = ""
        self._last_target: str | None = None
        self._initial_target: str | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SwitcherState:
        return self._state

    @property
    def catalog(self) -> SimplifiedIndex:
        return self._catalog

    @property
    def page(self) -> PageContext:
        return self._page

    @property
    def current_version(self) -> str | None:
        return self._current_version

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def query(self) -> str:
        return self._query

    @property
    def last_target(self) -> str | None:
        """Navigation target of the terminal selection, if one happened."""
        return self._last_target

    @property
    def initial_target(self) -> str | None:
        """Target the strategy opened on initialization, if any."""
        return self._initial_target

    def _transition(self, to_state: SwitcherState) -> None:
        if to_state not in VALID_TRANSITIONS[self._state]:
            raise InvalidTransitionError(
                f"Invalid switcher transition: {self._state.value} -> {to_state.value}"
            )
        logger.debug("Switcher %s -> %s", self._state.value, to_state.value)
        self._state = to_state

    def _require(self, state: SwitcherState, action: str) -> None:
        if self._state != state:
            raise InvalidTransitionError(
                f"Cannot {action} while switcher is {self._state.value}"
            )

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def load_catalog(self) -> SimplifiedIndex:
        """Fetch the catalog; fall back to a single synthetic entry on failure."""
        self._require(SwitcherState.UNINITIALIZED, "load the catalog")
        try:
            self._catalog = await self._source.fetch()
        except CatalogUnavailableError as exc:
            logger.warning("Version catalog unavailable, using current page only: %s", exc)
            self._catalog = fallback_catalog()
            self._transition(SwitcherState.CATALOG_UNAVAILABLE)
        else:
            self._transition(SwitcherState.CATALOG_LOADED)
        self._transition(SwitcherState.READY)
        return self._catalog

    def resolve(self) -> str:
        """Resolve the displayed version from page and catalog."""
        self._require(SwitcherState.READY, "resolve the current version")
        self._current_version = resolve_current_version(self._page, self._catalog)
        self._transition(SwitcherState.VERSION_KNOWN)
        logger.debug("Current version: %s", self._current_version)
        return self._current_version

    async def initialize(self) -> str:
        """Load the catalog, resolve the version, then run the strategy's initial load."""
        await self.load_catalog()
        current = self.resolve()
        target = self._strategy.initial_navigation(self._catalog, self._page)
        if target is not None:
            logger.info("Initial version load: %s", target)
            self._strategy.perform_navigation(target)
            self._initial_target = target
        return current

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def open(self) -> None:
        self._require(SwitcherState.VERSION_KNOWN, "open")
        self._is_open = True
        self._query = ""

    def close(self) -> None:
        self._is_open = False
        self._query = ""

    def toggle(self) -> None:
        if self._is_open:
            self.close()
        else:
            self.open()

    def filter(self, query: str) -> list[SimplifiedRecord]:
        """Set the search query and return the matching records."""
        self._query = query
        return filter_catalog(self._catalog.versions, query)

    def select(self, record: SimplifiedRecord) -> str | None:
        """Switch to ``record``.

        Returns the navigation target, or ``None`` when ``record`` is the
        version already shown or the offline stand-in for this page (the
        dropdown just closes).
        """
        self._require(SwitcherState.VERSION_KNOWN, "select a version")
        self.close()
        if record.clean_version == self._current_version or is_current_page_record(record):
            return None

        target = self._strategy.resolve_navigation_target(record, self._page)
        logger.info("Switching to version %s: %s", record.version, target)
        self._strategy.perform_navigation(target)
        self._last_target = target
        self._transition(SwitcherState.NAVIGATED)
        return target

    def find(self, clean_version: str) -> SimplifiedRecord | None:
        """Return the catalog record with ``clean_version``, if present."""
        for record in self._catalog.versions:
            if record.clean_version == clean_version:
                return record
        return None

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def view(self) -> SwitcherView:
        """Project the current state into a renderable view."""
        current = self._current_version
        latest = self._catalog.latest.clean_version if self._catalog.latest else None
        items = [
            SwitcherItem(
                version=r.version,
                clean_version=r.clean_version,
                build_date=r.build_date,
                path=r.path,
                is_current=(current is not None and r.clean_version == current)
                or is_current_page_record(r),
                is_latest=latest is not None and r.clean_version == latest,
            )
            for r in filter_catalog(self._catalog.versions, self._query)
        ]
        return SwitcherView(
            trigger_label=_trigger_label(current),
            is_open=self._is_open,
            query=self._query,
            items=items,
        )


def _trigger_label(current: str | None) -> str:
    if current is None:
        return "Loading versions..."
    if current[:1].isdigit():
        return f"v{current}"
    return current
