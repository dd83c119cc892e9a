"""Processing session for one documentation tree.

:class:`DocTree` owns a parsed POD tree from a route-definition module and
everything derived from it. Construction applies the ``docviewer`` merge
directives and styles the parameter lists; the HTML fragments, the navigation
index, and the module identifier are computed on first access and cached.

Example
-------
>>> from docviewer.document import DocTree
>>> tree = DocTree.from_simple_tree(
...     ["Document", {},
...         ["head1", {}, "Widgets"],
...         ["head3", {}, "GET /widgets"],
...         ["Para", {}, "List widgets."]],
...     file_path="/srv/shop/lib/Shop/Widgets.pm",
... )
>>> tree.module_id
'shop-widgets'
>>> sorted(tree.routes)
['get-widgets']

Several documents rendered on one page share their identifiers by seeding:

>>> other = DocTree.from_simple_tree(
...     ["Document", {}, ["head3", {}, "GET /widgets"]], ids_used=tree.ids_used
... )
>>> sorted(other.routes)
['get-widgets0']
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import typing as typ

from ._constants import DEFAULT_MODULE_NAME, MODULE_PATH_PATTERN
from .config.models import ViewerConfig
from .exceptions import StructureError
from .identifiers import IdentifierAllocator
from .merge import DirectiveProcessor, SectionRegistry
from .render import HtmlRenderer, NavigationIndexBuilder, route_anchor
from .styling import apply_list_classes
from .tree import (
    Element,
    ElementKind,
    Node,
    document_from_simple_tree,
    find_all,
    flatten_to_text,
)
from .tree.models import SECTION_BREAK_KINDS

if typ.TYPE_CHECKING:
    from pathlib import Path


class DocTree:
    """A doc tree with merge directives applied, ready for rendering."""

    def __init__(
        self,
        pod_tree: Element,
        *,
        file_path: str | Path | None = None,
        ids_used: cabc.Iterable[str] = (),
        config: ViewerConfig | None = None,
    ) -> None:
        """Process ``pod_tree`` in place.

        Parameters
        ----------
        pod_tree : Element
            Root ``Document`` element produced by the POD parser.
        file_path : str or Path, optional
            Path of the module the tree was parsed from; used to derive
            :attr:`module_id`.
        ids_used : Iterable[str], optional
            Identifiers already used by other documents on the same page.
        config : ViewerConfig, optional
            Merge, styling, and rendering options.

        Raises
        ------
        MergeTargetNotFoundError
            If a directive refers to an undefined section in strict mode.
        DirectiveError
            If a directive has no enclosing section in strict mode.

        A strict failure leaves ``pod_tree`` partly processed: merges applied
        before the failing directive stay in place and no directive block is
        removed. Pass a copy when the caller still needs the original tree.
        """
        self.pod_tree = pod_tree
        self.file_path = str(file_path) if file_path is not None else None
        self.config = config or ViewerConfig()
        self.allocator = IdentifierAllocator(
            ids_used, fallback_prefix=self.config.identifiers.fallback_prefix
        )
        self.registry = SectionRegistry(pod_tree)
        self.renderer = HtmlRenderer(self.allocator, self.config.rendering)
        self._massage_pod_tree()

    @classmethod
    def from_simple_tree(cls, data: typ.Any, **kwargs: typ.Any) -> DocTree:
        """Build a :class:`DocTree` from nested simple-tree arrays."""
        return cls(document_from_simple_tree(data), **kwargs)

    def _massage_pod_tree(self) -> None:
        directives = self.config.directives
        DirectiveProcessor(
            self.pod_tree,
            registry=self.registry,
            target=directives.target,
            strict=directives.strict,
        ).run()
        if self.config.styling.enabled:
            apply_list_classes(self.pod_tree, classes=self.config.styling.list_classes)

    @property
    def ids_used(self) -> frozenset[str]:
        """Return every identifier this document has issued or was seeded with."""
        return self.allocator.issued

    @functools.cached_property
    def module_id(self) -> str:
        """Return the unique identifier of the module this tree documents."""
        if self.file_path is None:
            return self.allocator.allocate(DEFAULT_MODULE_NAME)
        module_path = MODULE_PATH_PATTERN.sub(r"\1", self.file_path)
        return self.allocator.allocate(module_path)

    @functools.cached_property
    def routes(self) -> dict[str, list[str]]:
        """Return route id to the HTML of each top-level node in that route.

        A route starts at a ``head3`` and runs until the next ``head1``,
        ``head2``, or ``head3``.

        Raises
        ------
        StructureError
            If any node cannot be rendered; no partial result is cached.
        """
        routes: dict[str, list[str]] = {}
        current: str | None = None
        section: str | None = None
        for node in self.pod_tree.children:
            if isinstance(node, Element) and node.kind in SECTION_BREAK_KINDS:
                current = section = None
                if node.is_kind(ElementKind.HEAD3):
                    section = flatten_to_text(node)
                    current = route_anchor(node, self.allocator)
            if current is None:
                continue
            routes.setdefault(current, []).append(self._render_in(node, section))
        return routes

    @functools.cached_property
    def index(self) -> str:
        """Return the sidebar index HTML for this module."""
        builder = NavigationIndexBuilder(
            self.allocator, module_id=self.module_id, config=self.config.rendering
        )
        return builder.build(self.pod_tree)

    def rebuild(self) -> None:
        """Forget cached derived values after the tree was edited externally."""
        self.registry.rebuild()
        for name in ("routes", "index"):
            self.__dict__.pop(name, None)

    def search_tree(self, wanted: str | cabc.Collection[str]) -> list[Node]:
        """Search the whole tree; see :func:`docviewer.tree.find_all`."""
        return find_all(self.pod_tree, wanted)

    def render_as_html(self, element: Node | None = None) -> str:
        """Return the HTML for ``element``, or for the whole tree when omitted."""
        return self.renderer.render(self.pod_tree if element is None else element)

    def _render_in(self, node: Node, section: str | None) -> str:
        try:
            return self.renderer.render(node)
        except StructureError as exc:
            exc.section = exc.section or section
            raise


__all__ = ["DocTree"]
