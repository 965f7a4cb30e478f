"""HTML fragment for the version switcher — markup only, no styling."""

from __future__ import annotations

import html

from versionstage.models.switcher import SwitcherView


def render_switcher_html(view: SwitcherView) -> str:
    """Render a SwitcherView as the switcher's DOM fragment."""
    dropdown_css = "version-dropdown open" if view.is_open else "version-dropdown"

    rows: list[str] = []
    for item in view.items:
        css = "version-item current" if item.is_current else "version-item"
        badge = ' <span class="version-badge">latest</span>' if item.is_latest else ""
        rows.append(
            f'    <div class="{css}" data-version="{html.escape(item.clean_version)}"'
            f' data-path="{html.escape(item.path)}">'
            f'<div class="version-name">{html.escape(item.version)}{badge}</div>'
            f'<div class="version-date">{html.escape(item.build_date or "unknown date")}</div>'
            "</div>"
        )
    if view.no_results:
        rows.append('    <div class="no-results">No matching versions</div>')

    return "\n".join(
        [
            '<div id="version-switcher">',
            f'  <div class="version-trigger">{html.escape(view.trigger_label)}</div>',
            f'  <div class="{dropdown_css}">',
            f'    <input type="text" class="version-search" value="{html.escape(view.query)}" />',
            '    <div class="version-list">',
            *rows,
            "    </div>",
            "  </div>",
            "</div>",
        ]
    )
