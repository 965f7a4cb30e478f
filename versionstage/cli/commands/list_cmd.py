"""``versionstage list`` — show the published version catalog."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from versionstage.config import settings
from versionstage.render.console import IndexRenderer
from versionstage.resolver.catalog import CatalogUnavailableError, FileCatalogSource

console = Console()


def list_cmd(
    archive_dir: Path = typer.Option(
        None,
        "--archive-dir",
        "-a",
        help="Archive root (default: VERSIONSTAGE_ARCHIVE_DIR or archive/versions).",
    ),
) -> None:
    """Show the versions listed in the archive's simplified index."""
    archive_root = archive_dir or settings.archive_dir
    source = FileCatalogSource(archive_root / settings.simple_index_filename)

    try:
        catalog = asyncio.run(source.fetch())
    except CatalogUnavailableError as exc:
        console.print(f"[bold red]No version catalog:[/bold red] {exc}")
        console.print("[dim]Build one with: versionstage index[/dim]")
        raise typer.Exit(code=1)

    IndexRenderer(console=console).print_index(catalog)
