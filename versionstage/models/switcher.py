"""Version switcher state models — page context and lifecycle transitions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SwitcherState(str, Enum):
    """Lifecycle of a version switcher for one page load."""

    UNINITIALIZED = "uninitialized"
    CATALOG_LOADED = "catalog_loaded"
    CATALOG_UNAVAILABLE = "catalog_unavailable"
    READY = "ready"
    VERSION_KNOWN = "version_known"
    NAVIGATED = "navigated"


# Valid state transitions, enforced by VersionSwitcher.
# NAVIGATED is terminal: the page has been left.
VALID_TRANSITIONS: dict[SwitcherState, set[SwitcherState]] = {
    SwitcherState.UNINITIALIZED: {
        SwitcherState.CATALOG_LOADED,
        SwitcherState.CATALOG_UNAVAILABLE,
    },
    SwitcherState.CATALOG_LOADED: {SwitcherState.READY},
    SwitcherState.CATALOG_UNAVAILABLE: {SwitcherState.READY},
    SwitcherState.READY: {SwitcherState.VERSION_KNOWN},
    SwitcherState.VERSION_KNOWN: {SwitcherState.NAVIGATED},
    SwitcherState.NAVIGATED: set(),  # terminal
}


class PageContext(BaseModel):
    """What the switcher can observe about the page hosting it.

    ``pathname`` is the location path; ``current_version`` is the global
    the hosting page (or its injector script) may have set.
    """

    model_config = ConfigDict(frozen=True)

    pathname: str = "/"
    current_version: str | None = None


class SwitcherItem(BaseModel):
    """One rendered row of the version list."""

    model_config = ConfigDict(frozen=True)

    version: str
    clean_version: str
    build_date: str
    path: str
    is_current: bool = False
    is_latest: bool = False


class SwitcherView(BaseModel):
    """Disposable projection of switcher state, regenerated on every change."""

    model_config = ConfigDict(frozen=True)

    trigger_label: str
    is_open: bool
    query: str
    items: list[SwitcherItem]

    @property
    def no_results(self) -> bool:
        return not self.items
