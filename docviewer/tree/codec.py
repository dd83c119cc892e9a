"""Convert between nested simple-tree arrays and :class:`Element` trees.

The upstream POD parser emits ``Pod::Simple::SimpleTree`` structures: every
element is an array of its name, an attribute mapping, and zero or more
children, while text is a bare string. Serialised to JSON this reads as::

    ["Document", {"start_line": 1},
        ["head3", {}, "GET /widgets"],
        ["Para", {}, "Lists every widget."]]

Example
-------
>>> from docviewer.tree.codec import from_simple_tree, to_simple_tree
>>> tree = from_simple_tree(["Document", {}, ["Para", {}, "Hello"]])
>>> tree.children[0].name
'Para'
>>> to_simple_tree(tree)
['Document', {}, ['Para', {}, 'Hello']]
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from docviewer.exceptions import StructureError

from .models import Element, Node


def from_simple_tree(data: typ.Any, *, _trail: tuple[str, ...] = ()) -> Node:
    """Build a node from a simple-tree array or text leaf.

    Raises
    ------
    StructureError
        If ``data`` is neither a string nor a ``[name, {attributes}, ...]``
        sequence.
    """
    match data:
        case str():
            return data
        case [str() as name, cabc.Mapping() as attributes, *children]:
            trail = (*_trail, name)
            return Element(
                name,
                dict(attributes),
                [from_simple_tree(child, _trail=trail) for child in children],
            )
        case _:
            msg = f"Cannot build a tree node from {type(data).__name__} value {data!r}"
            raise StructureError(msg, trail=_trail)


def to_simple_tree(node: Node) -> typ.Any:
    """Return the simple-tree array form of ``node``."""
    if isinstance(node, Element):
        return [
            node.name,
            dict(node.attributes),
            *(to_simple_tree(child) for child in node.children),
        ]
    return node


def document_from_simple_tree(data: typ.Any) -> Element:
    """Build a tree from ``data``, requiring an element at the root."""
    root = from_simple_tree(data)
    if not isinstance(root, Element):
        msg = "The root of a documentation tree must be an element, not text."
        raise StructureError(msg)
    return root


__all__ = ["document_from_simple_tree", "from_simple_tree", "to_simple_tree"]
