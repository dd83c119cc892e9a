"""Transform parsed POD route documentation into HTML for the doc viewer.

This package merges ``input-from``/``output-from`` parameter directives across
route sections, styles the resulting parameter lists, and renders per-route
HTML fragments plus a sidebar index. The CLI entry points are exposed for the
``docviewer`` console script.

Exports
-------
- ``DocTree``: processing session for one parsed tree.
- ``ViewerConfig``: configuration dataclass (defaults when constructed empty).
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docviewer import DocTree
>>> doc = DocTree.from_simple_tree(["Document", {}, ["Para", {}, "Hi"]])
>>> doc.render_as_html()
'<p>Hi</p>'
"""

from __future__ import annotations

from .cli import app, main
from .config import ViewerConfig
from .document import DocTree

__all__ = ["DocTree", "ViewerConfig", "app", "main"]
