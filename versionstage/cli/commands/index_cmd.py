"""``versionstage index`` — rebuild the version index from the archive."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from versionstage.config import settings
from versionstage.core.index_builder import update_index
from versionstage.render.console import IndexRenderer

console = Console()


def index_cmd(
    archive_dir: Path = typer.Option(
        None,
        "--archive-dir",
        "-a",
        help="Archive root (default: VERSIONSTAGE_ARCHIVE_DIR or archive/versions).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print the written file paths.",
    ),
) -> None:
    """Rescan every archived version and rewrite the index files.

    Versions with missing or malformed metadata are skipped with a warning.
    """
    archive_root = archive_dir or settings.archive_dir
    result = update_index(archive_root)

    if not quiet:
        renderer = IndexRenderer(console=console)
        renderer.print_delta(result.delta)
        renderer.print_index(result.simple)

    for path in (
        result.artifacts.index_path,
        result.artifacts.simple_index_path,
        result.artifacts.landing_path,
    ):
        console.print(f"[dim]wrote[/dim] {path}")
