"""versionstage data models — all Pydantic v2, all frozen (immutable)."""

from versionstage.models.switcher import (
    VALID_TRANSITIONS,
    PageContext,
    SwitcherItem,
    SwitcherState,
    SwitcherView,
)
from versionstage.models.versions import (
    IndexDelta,
    SimplifiedIndex,
    SimplifiedLatest,
    SimplifiedRecord,
    VersionIndex,
    VersionMetadata,
    VersionRecord,
)

__all__ = [
    # versions
    "VersionMetadata",
    "VersionRecord",
    "VersionIndex",
    "SimplifiedRecord",
    "SimplifiedLatest",
    "SimplifiedIndex",
    "IndexDelta",
    # switcher
    "SwitcherState",
    "VALID_TRANSITIONS",
    "PageContext",
    "SwitcherItem",
    "SwitcherView",
]
