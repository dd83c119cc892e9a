"""Locate, and where necessary create, a section's parameter list.

Route documentation is flat: a ``head3`` names the route, a ``head4`` names
the ``Input`` or ``Output`` subsection, and an ``over-text`` list follows. The
:class:`SectionRegistry` indexes those lists by the headings they fall under,
and :class:`StructureEnsurer` inserts any missing heading or list so a merge
always has a destination.
"""

from __future__ import annotations

import logging

from docviewer._constants import INPUT, OUTPUT
from docviewer.tree import (
    Element,
    ElementKind,
    flatten_to_text,
    new_definition_list,
    new_heading,
)
from docviewer.tree.models import SECTION_BREAK_KINDS

logger = logging.getLogger(__name__)

RegistryKey = tuple[str | None, str | None]


class SectionRegistry:
    """Lazily built lookup of definition lists by section and subsection.

    The index is derived from the document's top-level children on first use
    and kept up to date by :class:`StructureEnsurer`. Call :meth:`rebuild`
    after mutating the tree by any other means.

    Headings are matched by text, so repeated headings share one key. The
    first list filed under a key wins, in document order, and
    :class:`StructureEnsurer` scaffolds under the first heading with the text.
    """

    def __init__(self, document: Element) -> None:
        self.document = document
        self._entries: dict[RegistryKey, Element] | None = None

    @property
    def entries(self) -> dict[RegistryKey, Element]:
        """Return the memoised index, building it on first access."""
        if self._entries is None:
            self._entries = self._build()
        return self._entries

    def lookup(self, section: str | None, subsection: str | None) -> Element | None:
        """Return the list owned by ``section``/``subsection``, if any."""
        return self.entries.get((section, subsection))

    def register(
        self, section: str | None, subsection: str | None, element: Element
    ) -> None:
        """Record ``element`` as the list owned by ``section``/``subsection``."""
        self.entries.setdefault((section, subsection), element)

    def rebuild(self) -> None:
        """Discard the memoised index so the next access rescans the tree."""
        self._entries = None

    def _build(self) -> dict[RegistryKey, Element]:
        entries: dict[RegistryKey, Element] = {}
        section: str | None = None
        subsection: str | None = None
        for node in self.document.children:
            if not isinstance(node, Element):
                continue
            match node.kind:
                case ElementKind.HEAD1 | ElementKind.HEAD2:
                    section = subsection = None
                case ElementKind.HEAD3:
                    section = flatten_to_text(node)
                    subsection = None
                case ElementKind.HEAD4:
                    subsection = flatten_to_text(node)
                case ElementKind.DEFINITION_LIST:
                    entries.setdefault((section, subsection), node)
        return entries


class StructureEnsurer:
    """Guarantee a section has a ``head4`` and definition list for a kind."""

    def __init__(self, document: Element, registry: SectionRegistry) -> None:
        self.document = document
        self.registry = registry

    def ensure_target(self, section: str, kind: str) -> Element:
        """Return the ``kind`` definition list of ``section``, creating it if needed.

        Parameters
        ----------
        section : str
            Text of the ``head3`` heading owning the list.
        kind : str
            Subsection label, ``"Input"`` or ``"Output"``.

        Returns
        -------
        Element
            The existing or newly inserted ``over-text`` element. Repeated
            calls return the same element.
        """
        existing = self.registry.lookup(section, kind)
        if existing is not None:
            return existing
        target = self._locate_or_insert(section, kind)
        self.registry.register(section, kind, target)
        return target

    def _locate_or_insert(self, section: str, kind: str) -> Element:
        children = self.document.children
        in_section = False
        in_subsection = False
        for position, node in enumerate(children):
            if not isinstance(node, Element):
                continue
            node_kind = node.kind
            if not in_section:
                if node_kind is ElementKind.HEAD3 and flatten_to_text(node) == section:
                    in_section = True
                continue

            if node_kind in SECTION_BREAK_KINDS:
                return self._insert(position, kind, with_heading=not in_subsection)
            if node_kind is ElementKind.HEAD4:
                heading = flatten_to_text(node)
                if in_subsection:
                    return self._insert(position, kind, with_heading=False)
                if heading == kind:
                    in_subsection = True
                elif kind == INPUT and heading == OUTPUT:
                    return self._insert(position, kind, with_heading=True)
            elif node_kind is ElementKind.DEFINITION_LIST and in_subsection:
                return node

        return self._insert(len(children), kind, with_heading=not in_subsection)

    def _insert(self, position: int, kind: str, *, with_heading: bool) -> Element:
        """Splice a (heading and) empty list in at ``position``; return the list."""
        definition_list = new_definition_list()
        scaffold: list[Element] = [definition_list]
        if with_heading:
            scaffold.insert(0, new_heading(4, kind))
        self.document.children[position:position] = scaffold
        logger.debug(
            "Inserted %s %s list at position %d",
            "heading and" if with_heading else "empty",
            kind,
            position,
        )
        return definition_list


__all__ = ["RegistryKey", "SectionRegistry", "StructureEnsurer"]
