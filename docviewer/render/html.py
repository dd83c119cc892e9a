"""Render a processed doc tree into HTML fragments.

Rendering dispatches on :class:`~docviewer.tree.ElementKind` through a table of
handlers. Text leaves are HTML-escaped and then decorated: ``TODO``/``FIXME``
markers become labels and ``GET /path``-style route references become links
to the route's panel in the viewer.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import re
import typing as typ
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docviewer._constants import HTML_ATTRIBUTES, LINE_FEEDS
from docviewer.config.models import RenderConfig
from docviewer.exceptions import StructureError
from docviewer.tree import Element, ElementKind, Node, flatten_to_text, tag_pairs

if typ.TYPE_CHECKING:
    from docviewer.identifiers import IdentifierAllocator

logger = logging.getLogger(__name__)

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
_SIMPLE_TAGS: dict[ElementKind, str] = {
    ElementKind.PARA: "p",
    ElementKind.ITALIC: "i",
    ElementKind.BOLD: "b",
    ElementKind.CODE: "code",
}


def route_pattern(methods: cabc.Iterable[str]) -> re.Pattern[str]:
    """Return a pattern matching ``METHOD /path`` references for ``methods``."""
    alternatives = "|".join(re.escape(method) for method in methods)
    return re.compile(rf"((?:{alternatives})\s/\S+)")


class HtmlRenderer:
    """Turn tree nodes into HTML strings."""

    def __init__(
        self, allocator: IdentifierAllocator, config: RenderConfig | None = None
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        allocator : IdentifierAllocator
            Source of identifiers for in-page links; only non-unique
            identifiers are requested, so the registry is never modified.
        config : RenderConfig, optional
            Rendering options; defaults to :class:`RenderConfig`.
        """
        self.allocator = allocator
        self.config = config or RenderConfig()
        self._route_pattern = route_pattern(self.config.route_methods)
        self._marker_patterns = [
            (word, css_class, re.compile(rf"{re.escape(word)}:?"))
            for word, css_class in self.config.markers.items()
        ]
        self._formatter = HtmlFormatter(
            style=self.config.pygments_style, cssclass="codehilite"
        )
        self._trail: list[str] = []
        self._handlers: dict[ElementKind, cabc.Callable[[Element], str]] = {
            ElementKind.DOCUMENT: self._children,
            ElementKind.HEAD1: self._heading,
            ElementKind.HEAD2: self._heading,
            ElementKind.HEAD3: self._heading,
            ElementKind.HEAD4: self._heading,
            ElementKind.PARA: self._simple,
            ElementKind.ITALIC: self._simple,
            ElementKind.BOLD: self._simple,
            ElementKind.CODE: self._simple,
            ElementKind.VERBATIM: self._verbatim,
            ElementKind.DEFINITION_LIST: self._definition_list,
            ElementKind.LINK: self._link,
        }

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted verbatim blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, node: Node) -> str:
        """Return the HTML for ``node`` and everything beneath it.

        Raises
        ------
        StructureError
            If an element of an unknown kind has no child to fall back on.
        """
        if not isinstance(node, Element):
            return self.text(node)

        self._trail.append(node.name)
        try:
            handler = self._handlers.get(node.kind)
            if handler is None:
                return self._unknown(node)
            return handler(node)
        finally:
            self._trail.pop()

    def text(self, text: str) -> str:
        """Escape ``text`` and apply marker labels and route links."""
        html = escape(text, quote=True)
        for word, css_class, pattern in self._marker_patterns:
            html = pattern.sub(f'<span class="label {css_class}">{word}</span>', html)

        def _link_route(match: re.Match[str]) -> str:
            route = match.group(1)
            target = self.allocator.allocate(route, unique=False)
            return f'<a href="{self.config.anchor_prefix}{target}">{route}</a>'

        return self._route_pattern.sub(_link_route, html)

    def _unknown(self, element: Element) -> str:
        if not element.children:
            msg = f"No idea how to render element {element.name!r}"
            raise StructureError(msg, kind=element.name, trail=self._trail)
        logger.warning(
            "Unrecognised block element %s; rendering its first child",
            element.name,
        )
        return self.render(element.children[0])

    def _children(self, element: Element) -> str:
        return "".join(self.render(child) for child in element.children)

    def _heading(self, element: Element) -> str:
        level = typ.cast("ElementKind", element.kind).heading_level
        return "\n" + self.tag(f"h{level}", element) + "\n"

    def _simple(self, element: Element) -> str:
        return self.tag(_SIMPLE_TAGS[typ.cast("ElementKind", element.kind)], element)

    def _verbatim(self, element: Element) -> str:
        language = self.config.verbatim_language
        if not language:
            return self.tag("pre", element)
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(flatten_to_text(element), lexer, self._formatter)
        safe_lang = escape(language, quote=True)
        return CODEHILITE_OPEN_TAG.sub(
            f'<div class="codehilite" data-language="{safe_lang}">', html, 1
        )

    def _definition_list(self, element: Element) -> str:
        # Built by hand: terms and definitions come from sibling nodes.
        html = beginning_tag("dl", element.attributes.get(HTML_ATTRIBUTES)) + "\n"
        for pair in tag_pairs(element):
            html += self.tag("dt", pair.term)
            html += "<dd>" + "".join(self.render(node) for node in pair.definition)
            html += "</dd>"
        return html + "\n</dl>\n"

    def _link(self, element: Element) -> str:
        attributes = element.attributes
        url = ""
        target = attributes.get("to")
        if target:
            url = str(target)
            if attributes.get("type") == "pod":
                url = self.config.pod_link_template.format(target=url)
        section = attributes.get("section")
        if section:
            url += "#" + self.allocator.allocate(str(section), unique=False)
        html_attributes = {**attributes.get(HTML_ATTRIBUTES, {}), "href": url}
        return self.tag("a", element, html_attributes)

    def tag(
        self,
        tag_name: str,
        element: Element,
        html_attributes: cabc.Mapping[str, typ.Any] | None = None,
    ) -> str:
        """Wrap the rendered children of ``element`` in ``tag_name``."""
        if html_attributes is None:
            html_attributes = element.attributes.get(HTML_ATTRIBUTES)
        line_feed = "\n" if element.attributes.get(LINE_FEEDS) else ""
        return (
            beginning_tag(tag_name, html_attributes)
            + line_feed
            + self._children(element)
            + line_feed
            + f"</{tag_name}>"
        )


def beginning_tag(
    tag_name: str, attributes: cabc.Mapping[str, typ.Any] | None = None
) -> str:
    """Return an opening tag with ``attributes`` sorted by name."""
    html = f"<{tag_name}"
    for name in sorted(attributes or {}):
        html += f' {name}="{escape(str(attributes[name]), quote=True)}"'
    return html + ">"


__all__ = ["HtmlRenderer", "beginning_tag", "route_pattern"]
