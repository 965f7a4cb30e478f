"""``versionstage archive VERSION`` — archive a build and refresh the index.

Copies the build directory into the archive under its clean version,
writes the version metadata and injector script, then rebuilds
``index.json``, ``versions.json`` and the landing page.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from versionstage.config import settings
from versionstage.core.archiver import (
    BuildDirectoryNotFoundError,
    InvalidVersionError,
    VersionExistsError,
    archive_version,
)
from versionstage.core.index_builder import update_index
from versionstage.render.console import IndexRenderer

console = Console()


def archive_cmd(
    version: str = typer.Argument(
        ...,
        help="Version label to archive, e.g. v1.2.0.",
    ),
    build_dir: Path = typer.Option(
        ...,
        "--build-dir",
        "-b",
        help="Directory containing the build output.",
    ),
    archive_dir: Path = typer.Option(
        None,
        "--archive-dir",
        "-a",
        help="Archive root (default: VERSIONSTAGE_ARCHIVE_DIR or archive/versions).",
    ),
    clean_version: str = typer.Option(
        None,
        "--clean-version",
        "-c",
        help="Normalized version used for ordering and the directory name.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite the version if it is already archived.",
    ),
    update: bool = typer.Option(
        True,
        "--index/--no-index",
        help="Rebuild the version index after archiving.",
    ),
) -> None:
    """Archive a build output directory as a new version."""
    archive_root = archive_dir or settings.archive_dir

    try:
        result = archive_version(
            version,
            build_dir,
            archive_root,
            clean_version=clean_version,
            force=force,
        )
    except InvalidVersionError as exc:
        console.print(f"[bold red]Invalid version:[/bold red] {exc}")
        console.print("[dim]Use MAJOR.MINOR.PATCH, optionally with a pre-release or build suffix.[/dim]")
        raise typer.Exit(code=1)
    except BuildDirectoryNotFoundError as exc:
        console.print(f"[bold red]Build directory not found:[/bold red] {exc}")
        console.print(f"[dim]Working directory: {Path.cwd()}[/dim]")
        raise typer.Exit(code=1)
    except VersionExistsError as exc:
        console.print(f"[bold red]Already archived:[/bold red] {exc}")
        console.print("[dim]Pass --force to overwrite it.[/dim]")
        raise typer.Exit(code=1)

    lines = [
        f"[bold green]Version {version} archived.[/bold green]",
        "",
        f"[bold]Clean version:[/bold] {result.metadata.clean_version}",
        f"[bold]Location:[/bold]      {result.version_dir}",
        f"[bold]Commit:[/bold]        {result.metadata.commit}",
    ]
    if result.replaced:
        lines.append("[yellow]The previous archive of this version was replaced.[/yellow]")
    console.print(Panel("\n".join(lines), title="[bold]Archive[/bold]", border_style="green"))

    if update:
        outcome = update_index(archive_root)
        renderer = IndexRenderer(console=console)
        renderer.print_delta(outcome.delta)
        renderer.print_index(outcome.simple)
