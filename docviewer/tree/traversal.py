"""Traversal primitives shared by the merge engine and the renderer."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from .models import Element, ElementKind, Node


@dc.dataclass(slots=True)
class TermPair:
    """A definition-list term marker and the content nodes that follow it.

    Attributes
    ----------
    term : Element
        The ``item-text`` marker.
    definition : list[Node]
        Nodes between this marker and the next one.
    """

    term: Element
    definition: list[Node]

    @property
    def text(self) -> str:
        """Return the plain text of the term marker."""
        return flatten_to_text(self.term)


def children_of(node: Node) -> list[Node]:
    """Return the children of ``node``; leaves have none."""
    if isinstance(node, Element):
        return node.children
    return []


def flatten_to_text(*nodes: Node) -> str:
    """Concatenate the leaf text beneath ``nodes`` in document order."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Element):
            parts.append(flatten_to_text(*node.children))
        else:
            parts.append(node)
    return "".join(parts)


def find_all(node: Node, wanted: str | cabc.Collection[str]) -> list[Node]:
    """Search ``node`` depth-first for elements named ``wanted``.

    Parameters
    ----------
    node : Node
        Root of the search.
    wanted : str or collection of str
        A single element name, or a collection of alternative names.

    Returns
    -------
    list[Node]
        For a single name, the *children* of every match (typically the text
        of headings or directive payloads). For a collection, the matching
        elements themselves, so callers can tell which alternative matched.
        Matched elements are not searched further.
    """
    if not isinstance(node, Element):
        return []
    if isinstance(wanted, str):
        if node.name == wanted:
            return list(node.children)
    elif node.name in wanted:
        return [node]

    matches: list[Node] = []
    for child in node.children:
        matches.extend(find_all(child, wanted))
    return matches


def tag_pairs(element: Element) -> list[TermPair]:
    """Split a definition list into its ordered term/definition pairs.

    Nodes preceding the first term marker do not belong to any pair and are
    skipped.
    """
    pairs: list[TermPair] = []
    for child in element.children:
        if isinstance(child, Element) and child.is_kind(ElementKind.TERM):
            pairs.append(TermPair(term=child, definition=[]))
        elif pairs:
            pairs[-1].definition.append(child)
    return pairs


def new_heading(level: int, text: str) -> Element:
    """Return a ``headN`` element containing ``text``."""
    return Element(f"head{level}", {}, [text])


def new_definition_list() -> Element:
    """Return an empty ``over-text`` element ready to receive terms."""
    attributes = {"indent": 4, "~type": "text"}
    return Element(ElementKind.DEFINITION_LIST.value, attributes, [])


__all__ = [
    "TermPair",
    "children_of",
    "find_all",
    "flatten_to_text",
    "new_definition_list",
    "new_heading",
    "tag_pairs",
]
