"""Cyclopts CLI entrypoint for rendering parsed doc trees.

The ``docviewer`` console script consumes doc trees that the POD parser has
already serialised to JSON (see :mod:`docviewer.tree_file`), applies the merge
directives, and prints HTML or JSON for the viewer. Typical usage renders all
route modules that share one page with ``docviewer bundle`` so their anchors
stay unique.

Examples
--------
Render one module to HTML:

>>> from docviewer.cli import app
>>> app(["render", "widgets.json"])  # doctest: +SKIP

Build the per-module index and route fragments for a page:

>>> app(["bundle", "widgets.json", "orders.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter

from .config import ViewerConfig, load_viewer_config
from .document import DocTree
from .exceptions import DocViewerError
from .tree_file import dump_tree, load_tree_file

app = App(name="docviewer", config=cyclopts.config.Env("DOCVIEWER_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to viewer config YAML", env_var="DOCVIEWER_CONFIG"),
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Log merge and rendering details to stderr")
]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(path: Path | None) -> ViewerConfig:
    """Return the configuration at ``path``, or the defaults when not given."""
    if path is None:
        return ViewerConfig()
    return load_viewer_config(path)


def _fail(exc: DocViewerError) -> typ.NoReturn:
    print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


@app.command(help="Render a parsed doc tree as HTML.")
def render(
    tree: Path,
    *,
    config: ConfigOption = None,
    source_path: typ.Annotated[
        str | None,
        Parameter(help="Module path used for the module id (overrides the file)"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the full HTML rendering of ``tree``.

    Parameters
    ----------
    tree : Path
        JSON tree file produced from the POD parser output.
    config : Path or None, optional
        Viewer configuration file; defaults apply when omitted.
    source_path : str or None, optional
        Module path overriding the one recorded in (or implied by) the tree
        file.
    verbose : bool, optional
        Emit debug logging on stderr.
    """
    _configure_logging(verbose=verbose)
    try:
        viewer_config = _load_config(config)
        root, module_path = load_tree_file(tree)
        doc = DocTree(root, file_path=source_path or module_path, config=viewer_config)
        html = doc.render_as_html()
    except DocViewerError as exc:
        _fail(exc)
    print(html)


@app.command(help="Process several trees for one page and print their fragments.")
def bundle(
    trees: list[Path],
    *,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print a JSON list with the module id, index, and routes of each tree.

    Each tree's identifiers seed the next tree's allocator, so anchors stay
    unique across every module rendered on the page.

    Parameters
    ----------
    trees : list[Path]
        JSON tree files, in page order.
    config : Path or None, optional
        Viewer configuration file; defaults apply when omitted.
    verbose : bool, optional
        Emit debug logging on stderr.
    """
    _configure_logging(verbose=verbose)
    modules: list[dict[str, typ.Any]] = []
    ids_used: frozenset[str] = frozenset()
    try:
        viewer_config = _load_config(config)
        for tree in trees:
            root, module_path = load_tree_file(tree)
            doc = DocTree(
                root, file_path=module_path, ids_used=ids_used, config=viewer_config
            )
            modules.append(
                {"module_id": doc.module_id, "index": doc.index, "routes": doc.routes}
            )
            ids_used = doc.ids_used
    except DocViewerError as exc:
        _fail(exc)
    print(msgspec.json.format(msgspec.json.encode(modules), indent=2).decode("utf-8"))


@app.command(help="Print a tree after merge directives and styling were applied.")
def dump(
    tree: Path,
    *,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the processed simple-tree JSON of ``tree``."""
    _configure_logging(verbose=verbose)
    try:
        viewer_config = _load_config(config)
        root, module_path = load_tree_file(tree)
        doc = DocTree(root, file_path=module_path, config=viewer_config)
    except DocViewerError as exc:
        _fail(exc)
    print(dump_tree(doc.pod_tree))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docviewer`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
