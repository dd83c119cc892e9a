"""Apply ``input-from``/``output-from`` directives embedded in a doc tree.

A route can borrow the parameter documentation of another route with a
directive block such as::

    =for docviewer input-from GET /widgets

The processor walks the top level of the tree, merges the referenced
section's ``Input`` or ``Output`` list into the current section, and finally
removes every directive block so it is never rendered.
"""

from __future__ import annotations

import logging

from docviewer._constants import DELETE_FLAG, DIRECTIVE_PATTERN
from docviewer.exceptions import DirectiveError, MergeTargetNotFoundError
from docviewer.tree import Element, ElementKind, find_all, flatten_to_text

from .definitions import merge_definition_lists
from .structure import SectionRegistry, StructureEnsurer

logger = logging.getLogger(__name__)


class DirectiveProcessor:
    """Resolve merge directives for one document tree."""

    def __init__(
        self,
        document: Element,
        *,
        registry: SectionRegistry | None = None,
        target: str = "docviewer",
        strict: bool = True,
    ) -> None:
        """Initialize the processor.

        Parameters
        ----------
        document : Element
            Root element whose top-level children are scanned.
        registry : SectionRegistry, optional
            Shared section index; a fresh one is built when omitted.
        target : str, optional
            Value of the directive ``target`` attribute handled here.
        strict : bool, optional
            Raise on unresolved sources and misplaced directives instead of
            logging a warning and skipping them.
        """
        self.document = document
        self.registry = registry or SectionRegistry(document)
        self.ensurer = StructureEnsurer(document, self.registry)
        self.target = target
        self.strict = strict

    def run(self) -> int:
        """Apply every directive, then excise the directive blocks.

        Returns
        -------
        int
            Number of merges performed.

        Raises
        ------
        MergeTargetNotFoundError
            In strict mode, when a directive names a section without a list
            of the requested kind.
        DirectiveError
            In strict mode, when a directive appears before any ``head3``.

        Merges are applied as the scan goes, so an error leaves the earlier
        merges in place and every directive block still in the tree.
        """
        merges = 0
        section: str | None = None
        for node in list(self.document.children):
            if not isinstance(node, Element):
                continue
            if node.is_kind(ElementKind.HEAD3):
                section = flatten_to_text(node)
            elif self._is_directive(node):
                merges += self._apply(node, section)
                node.attributes[DELETE_FLAG] = True
        self._excise_flagged()
        return merges

    def _is_directive(self, element: Element) -> bool:
        return (
            element.is_kind(ElementKind.DIRECTIVE)
            and element.attributes.get("target") == self.target
        )

    def _apply(self, directive: Element, section: str | None) -> int:
        merges = 0
        for payload in find_all(directive, ElementKind.DATA.value):
            if not isinstance(payload, str):
                continue
            for line in payload.splitlines():
                match = DIRECTIVE_PATTERN.match(line.strip())
                if match is None:
                    continue
                kind = match.group("kind").capitalize()
                reference = match.group("reference").strip()
                if self._merge(reference, kind, section):
                    merges += 1
        return merges

    def _merge(self, reference: str, kind: str, section: str | None) -> bool:
        if section is None:
            msg = (
                f"{kind.lower()}-from {reference!r} appears before any route "
                "heading, so there is no section to merge into."
            )
            if self.strict:
                raise DirectiveError(msg)
            logger.warning("Skipping directive: %s", msg)
            return False

        source = self.registry.lookup(reference, kind)
        if source is None:
            error = MergeTargetNotFoundError(reference, kind, section)
            if self.strict:
                raise error
            logger.warning("Skipping directive: %s", error)
            return False

        dest = self.ensurer.ensure_target(section, kind)
        logger.debug("Merging %s of %r into %r", kind, reference, section)
        merge_definition_lists(source, dest)
        return True

    def _excise_flagged(self) -> None:
        self.document.children[:] = [
            node
            for node in self.document.children
            if not (isinstance(node, Element) and node.attributes.get(DELETE_FLAG))
        ]


__all__ = ["DirectiveProcessor"]
