"""Presentation of version indexes — pure projections, no state.

Modules
-------
landing
    ``render_landing_page`` turns a ``SimplifiedIndex`` into the archive
    root's ``index.html``.
fragment
    ``render_switcher_html`` turns a ``SwitcherView`` into an HTML fragment.
console
    ``IndexRenderer`` turns indexes and switcher views into Rich renderables.
"""
