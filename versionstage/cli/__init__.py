"""versionstage CLI — Typer-based command-line interface.

Provides the ``versionstage`` command with subcommands for archiving
builds, rebuilding the version index, listing the catalog, and resolving
version switches for a page path.

All output uses Rich for formatted terminal display.
"""
