"""Node types for parsed documentation trees.

A tree node is *either* a plain ``str`` leaf holding text, or an
:class:`Element` with a name, a mapping of attributes, and ordered children.
Element names are the ones emitted by the upstream POD parser (``head3``,
``Para``, ``over-text`` and so on); the names docviewer knows how to handle are
enumerated by :class:`ElementKind`.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class ElementKind(enum.StrEnum):
    """Element names with dedicated handling in the engine and renderer."""

    DOCUMENT = "Document"
    HEAD1 = "head1"
    HEAD2 = "head2"
    HEAD3 = "head3"
    HEAD4 = "head4"
    PARA = "Para"
    DEFINITION_LIST = "over-text"
    TERM = "item-text"
    DIRECTIVE = "for"
    DATA = "Data"
    ITALIC = "I"
    BOLD = "B"
    CODE = "C"
    VERBATIM = "Verbatim"
    LINK = "L"

    @property
    def heading_level(self) -> int | None:
        """Return the heading level for ``headN`` kinds, otherwise ``None``."""
        if self.value.startswith("head"):
            return int(self.value[len("head") :])
        return None


SECTION_BREAK_KINDS = frozenset(
    {ElementKind.HEAD1, ElementKind.HEAD2, ElementKind.HEAD3}
)


@dc.dataclass(slots=True, eq=False)
class Element:
    """A named tree node with attributes and ordered children.

    Attributes
    ----------
    name : str
        Element name as produced by the parser.
    attributes : dict[str, Any]
        Parser attributes plus engine-private keys (deletion flag, HTML
        attributes, memoised anchors).
    children : list[Node]
        Child nodes in document order.
    """

    name: str
    attributes: dict[str, typ.Any] = dc.field(default_factory=dict)
    children: list[Node] = dc.field(default_factory=list)

    @property
    def kind(self) -> ElementKind | None:
        """Return the :class:`ElementKind` for this element, if it is known."""
        try:
            return ElementKind(self.name)
        except ValueError:
            return None

    def is_kind(self, *kinds: ElementKind) -> bool:
        """Return ``True`` when this element is one of ``kinds``."""
        return self.kind in kinds


Node: typ.TypeAlias = "Element | str"


__all__ = [
    "SECTION_BREAK_KINDS",
    "Element",
    "ElementKind",
    "Node",
]
