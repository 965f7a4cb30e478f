"""Landing page for the archive root — every version in index order."""

from __future__ import annotations

import html

from versionstage.models.versions import SimplifiedIndex


def render_landing_page(
    simple: SimplifiedIndex,
    *,
    title: str = "Version Archive",
    script_url: str | None = None,
    stylesheet_url: str | None = None,
) -> str:
    """Render the archive landing page.

    Lists every version in index order, links each to its directory and
    marks the ``latest`` entry.  With ``script_url`` the page also mounts
    the version switcher, and ``stylesheet_url`` adds its stylesheet.
    """
    latest_clean = simple.latest.clean_version if simple.latest else None
    latest_label = simple.latest.version if simple.latest else "none"

    items: list[str] = []
    for record in simple.versions:
        is_latest = record.clean_version == latest_clean
        badge = ' <span class="latest-badge">latest</span>' if is_latest else ""
        css = "version-card latest" if is_latest else "version-card"
        items.append(
            "\n".join(
                [
                    f'      <li class="{css}" data-version="{html.escape(record.clean_version)}">',
                    f'        <a href="{html.escape(record.path)}/">{html.escape(record.version)}</a>{badge}',
                    f'        <span class="version-date">{html.escape(record.build_date)}</span>',
                    "      </li>",
                ]
            )
        )
    if not items:
        items.append('      <li class="no-results">No versions archived yet.</li>')

    head_extra: list[str] = []
    if stylesheet_url:
        head_extra.append(f'    <link rel="stylesheet" href="{html.escape(stylesheet_url)}" />')
    switcher: list[str] = []
    if script_url:
        switcher = [
            '    <div id="version-switcher"></div>',
            f'    <script src="{html.escape(script_url)}"></script>',
        ]

    page = "\n".join(
        [
            "<!doctype html>",
            '<html lang="en">',
            "  <head>",
            '    <meta charset="utf-8" />',
            '    <meta name="viewport" content="width=device-width, initial-scale=1" />',
            f"    <title>{html.escape(title)}</title>",
            *head_extra,
            "  </head>",
            "  <body>",
            f"    <h1>{html.escape(title)}</h1>",
            f"    <p>Total versions: {simple.count} | Latest: {html.escape(latest_label)}</p>",
            '    <ul class="version-list">',
            "\n".join(items),
            "    </ul>",
            *switcher,
            "  </body>",
            "</html>",
        ]
    )
    return page + "\n"
