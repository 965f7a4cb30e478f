"""versionstage: versioned build archive with a version switcher.

- Archive build outputs under ``{archive}/{clean_version}/`` with metadata
- Rebuild a SemVer-ordered full index, a simplified index and a landing page
- Resolve the version a page shows and where switching to another one leads
- Redirect and frame navigation strategies behind one switcher core
- Typer/Rich CLI, env-driven config via pydantic-settings
"""

__version__ = "0.3.0"
__description__ = "Versioned build archive, version index and version switcher"

from versionstage.core.archiver import archive_version
from versionstage.core.index_builder import rebuild_index, update_index
from versionstage.resolver.switcher import VersionSwitcher
from versionstage.cli.app import app as cli

__all__ = [
    "archive_version",
    "rebuild_index",
    "update_index",
    "VersionSwitcher",
    "cli",
    "__version__",
]
