"""Build the sidebar navigation index for a processed doc tree.

Every ``head1`` opens a collapsible group in the sidebar and every ``head3``
(a route) adds an entry to the open group. The markup is assembled line by
line and indented two spaces per open ``<ul>``/``<li>``.

Example
-------
>>> from docviewer.identifiers import IdentifierAllocator
>>> from docviewer.render.index import NavigationIndexBuilder
>>> from docviewer.tree import from_simple_tree
>>> tree = from_simple_tree(["Document", {}, ["head3", {}, "GET /widgets"]])
>>> builder = NavigationIndexBuilder(IdentifierAllocator(), module_id="shop")
>>> print(builder.build(tree))  # doctest: +NORMALIZE_WHITESPACE
<ul>
  <li>
    <ul class="collapse route-list shop">
      <li><a href="#!/get-widgets" class="showpanel" id="get-widgets" title="GET /widgets"><i>GET</i> /widgets</a></li>
    </ul>
  </li>
</ul>
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from docviewer._constants import ANCHOR
from docviewer.config.models import RenderConfig
from docviewer.tree import Element, ElementKind, find_all, flatten_to_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docviewer.identifiers import IdentifierAllocator

_LIST_TAG = re.compile(r"<(?P<close>/)?(?:ul|li)\b", re.IGNORECASE)


def route_anchor(heading: Element, allocator: IdentifierAllocator) -> str:
    """Return the unique identifier of a route heading, allocating it once.

    The identifier is memoised on the heading so the routes map and the index
    refer to the same anchor however many times either is built.
    """
    anchor = heading.attributes.get(ANCHOR)
    if anchor is None:
        anchor = allocator.allocate(flatten_to_text(heading))
        heading.attributes[ANCHOR] = anchor
    return anchor


class IndentedLines:
    """Accumulate HTML lines, indenting by the depth of open list tags."""

    def __init__(self) -> None:
        self.depth = 0
        self._lines: list[str] = []

    def add(self, *lines: str) -> None:
        """Append ``lines``, adjusting the depth for each ``ul``/``li`` tag."""
        for line in lines:
            change = sum(
                -1 if match.group("close") else 1
                for match in _LIST_TAG.finditer(line)
            )
            if change < 0:
                self.depth = max(self.depth + change, 0)
            self._lines.append("  " * self.depth + line)
            if change > 0:
                self.depth += change

    def __str__(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)


class NavigationIndexBuilder:
    """Render ``head1`` groups and ``head3`` route entries as nested lists."""

    def __init__(
        self,
        allocator: IdentifierAllocator,
        *,
        module_id: str,
        config: RenderConfig | None = None,
    ) -> None:
        self.allocator = allocator
        self.module_id = module_id
        self.config = config or RenderConfig()
        methods = self.config.route_methods
        alternatives = "|".join(re.escape(method) for method in methods)
        self._method_pattern = re.compile(rf"\b({alternatives})\b", re.IGNORECASE)

    def build(self, document: Element) -> str:
        """Return the index HTML for ``document``; empty when it has no headings."""
        wanted = {ElementKind.HEAD1.value, ElementKind.HEAD3.value}
        headings = find_all(document, wanted)
        return self.build_from(typ.cast("list[Element]", headings))

    def build_from(self, headings: cabc.Iterable[Element]) -> str:
        """Return the index HTML for an ordered iterable of headings."""
        html = IndentedLines()
        groups = 0
        group_open = False
        for heading in headings:
            if heading.is_kind(ElementKind.HEAD1):
                if group_open:
                    html.add("</ul>", "</li>")
                elif groups == 0:
                    html.add("<ul>")
                self._add_group_header(html, heading, first=groups == 0)
                groups += 1
                group_open = True
            else:
                if not group_open:
                    if groups == 0:
                        html.add("<ul>")
                    html.add("<li>", self._route_list_tag())
                    groups += 1
                    group_open = True
                self._add_route_entry(html, heading)
        if group_open:
            html.add("</ul>", "</li>", "</ul>")
        return str(html)

    def _route_list_tag(self) -> str:
        return f'<ul class="collapse route-list {self.module_id}">'

    def _accordion(self) -> str:
        selector = escape(self.config.sidebar_selector, quote=True)
        return (
            f'data-toggle="collapse" data-target=".{self.module_id}"'
            f' data-parent="{selector}"'
        )

    def _add_group_header(
        self, html: IndentedLines, heading: Element, *, first: bool
    ) -> None:
        prefix = self.config.anchor_prefix
        lines = ["<li>"]
        if first:
            lines.append(
                f'<a href="{prefix}{self.module_id}-pod" {self._accordion()}'
                f' id="{self.module_id}" class="pod-link showpanel">Full POD</a>'
            )
        content = escape(flatten_to_text(heading), quote=False)
        lines.append(
            f'<a href="{prefix}{self.module_id}" {self._accordion()}'
            f' class="sidebar-header">{content}</a>'
        )
        lines.append(self._route_list_tag())
        html.add(*lines)

    def _add_route_entry(self, html: IndentedLines, heading: Element) -> None:
        anchor = route_anchor(heading, self.allocator)
        route = escape(flatten_to_text(heading), quote=True)
        styled = self._method_pattern.sub(r"<i>\1</i>", route, count=1)
        html.add(
            f'<li><a href="{self.config.anchor_prefix}{anchor}" class="showpanel"'
            f' id="{anchor}" title="{route}">{styled}</a></li>'
        )


__all__ = ["IndentedLines", "NavigationIndexBuilder", "route_anchor"]
