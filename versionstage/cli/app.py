"""Main Typer application — imports and registers all CLI commands.

Entry point: ``versionstage`` (configured via pyproject.toml scripts).

Commands: archive, index, list, resolve.
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from versionstage.cli.commands.archive import archive_cmd
from versionstage.cli.commands.index_cmd import index_cmd
from versionstage.cli.commands.list_cmd import list_cmd
from versionstage.cli.commands.resolve import resolve_cmd
from versionstage.config import settings

app = typer.Typer(
    name="versionstage",
    help="versionstage: archive versioned builds and switch between them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="archive", help="Archive a build as a new version.")(archive_cmd)
app.command(name="index", help="Rebuild the version index.")(index_cmd)
app.command(name="list", help="Show the archived version catalog.")(list_cmd)
app.command(name="resolve", help="Resolve a page's version and a switch target.")(resolve_cmd)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: VERSIONSTAGE_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging once for every command."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
