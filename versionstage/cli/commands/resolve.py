"""``versionstage resolve PATHNAME`` — run the version switcher for a page path.

Loads the archive's catalog, resolves which version a page at PATHNAME
shows, prints the switcher list and, with ``--select``, the URL the
switcher would navigate to.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from versionstage.config import settings
from versionstage.models.switcher import PageContext
from versionstage.render.console import IndexRenderer
from versionstage.resolver.catalog import FileCatalogSource
from versionstage.resolver.host import PageHost
from versionstage.resolver.navigation import FrameNavigation, RedirectNavigation
from versionstage.resolver.switcher import VersionSwitcher

console = Console()


def resolve_cmd(
    pathname: str = typer.Argument(
        ...,
        help="Location path of the page, e.g. /docs/1.2.0/index.html.",
    ),
    archive_dir: Path = typer.Option(
        None,
        "--archive-dir",
        "-a",
        help="Archive root (default: VERSIONSTAGE_ARCHIVE_DIR or archive/versions).",
    ),
    current_version: str = typer.Option(
        None,
        "--current-version",
        help="Current-version global set by the hosting page.",
    ),
    query: str = typer.Option(
        "",
        "--query",
        "-q",
        help="Search text applied to the version list.",
    ),
    select: str = typer.Option(
        None,
        "--select",
        "-s",
        help="Clean version to switch to.",
    ),
    frame: bool = typer.Option(
        False,
        "--frame",
        help="Use frame navigation instead of a full-page redirect.",
    ),
) -> None:
    """Resolve the current version of a page and compute a switch target."""
    archive_root = archive_dir or settings.archive_dir
    navigations: list[str] = []
    strategy = FrameNavigation(navigations.append) if frame else RedirectNavigation(navigations.append)

    host = PageHost(PageContext(pathname=pathname, current_version=current_version))
    switcher = host.mount(FileCatalogSource(archive_root / settings.simple_index_filename), strategy)
    current = asyncio.run(switcher.initialize())

    console.print(f"[bold]Current version:[/bold] {current}")
    if switcher.initial_target is not None:
        console.print(f"[bold]Frame loads:[/bold] {switcher.initial_target}")
    switcher.filter(query)
    console.print(IndexRenderer(console=console).render_view(switcher.view()))

    if select is None:
        return
    _select(switcher, select)


def _select(switcher: VersionSwitcher, clean_version: str) -> None:
    record = switcher.find(clean_version)
    if record is None:
        console.print(f"[bold red]Version {clean_version} is not in the catalog.[/bold red]")
        raise typer.Exit(code=1)

    target = switcher.select(record)
    if target is None:
        console.print(f"[yellow]Already on {record.version}; nothing to do.[/yellow]")
    else:
        console.print(f"[bold green]Navigate to:[/bold green] {target}")
