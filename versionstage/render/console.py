"""Rich terminal renderer for version indexes and switcher views.

Color scheme
------------
- bold green : latest version
- cyan       : current version (switcher views)
- dim        : everything else
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from versionstage.models.switcher import SwitcherView
from versionstage.models.versions import IndexDelta, SimplifiedIndex


class IndexRenderer:
    """Renders version indexes as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    def render_index(self, simple: SimplifiedIndex, *, title: str = "Version Archive") -> Panel:
        """Render a SimplifiedIndex as a Panel containing a Table."""
        table = Table(
            show_header=True,
            header_style="bold cyan",
            expand=True,
            show_lines=False,
        )
        table.add_column("#", style="dim", width=5, justify="right")
        table.add_column("Version", min_width=16)
        table.add_column("Clean", min_width=12)
        table.add_column("Build date", min_width=12)
        table.add_column("Path")

        latest_clean = simple.latest.clean_version if simple.latest else None
        for i, record in enumerate(simple.versions):
            label = record.version
            if record.clean_version == latest_clean:
                label = f"[bold green]{record.version}[/bold green] [green](latest)[/green]"
            table.add_row(
                str(i),
                label,
                record.clean_version,
                record.build_date or "[dim]-[/dim]",
                f"{record.path}/",
            )

        latest = simple.latest.version if simple.latest else "none"
        summary = f"[bold]Versions:[/bold] {simple.count}  |  [bold]Latest:[/bold] {latest}"
        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title=f"[bold]{title}[/bold]",
            border_style="blue",
            padding=(1, 2),
        )

    def print_index(self, simple: SimplifiedIndex, *, title: str = "Version Archive") -> None:
        self.console.print(self.render_index(simple, title=title))

    def print_delta(self, delta: IndexDelta) -> None:
        """Print which versions appeared or disappeared since the last rebuild."""
        if not delta.changed:
            self.console.print("[dim]No version changes since the previous index.[/dim]")
            return
        for version in delta.added:
            self.console.print(f"[green]+ {version}[/green]")
        for version in delta.removed:
            self.console.print(f"[red]- {version}[/red]")

    # ------------------------------------------------------------------
    # Switcher view
    # ------------------------------------------------------------------

    def render_view(self, view: SwitcherView) -> Table:
        """Render a SwitcherView as the rows a visitor would see."""
        table = Table(title=view.trigger_label, show_header=False, expand=False)
        table.add_column("Version")
        table.add_column("Build date", style="dim")
        if view.no_results:
            table.add_row("[dim]No matching versions[/dim]", "")
            return table
        for item in view.items:
            label = item.version
            if item.is_current:
                label = f"[cyan]> {label}[/cyan]"
            if item.is_latest:
                label += " [green](latest)[/green]"
            table.add_row(label, item.build_date or "-")
        return table
