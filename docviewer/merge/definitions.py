"""Union two definition lists term by term.

Route documentation describes parameters as POD ``=over``/``=item`` lists,
where an item may itself contain a nested list (the fields of a parameter
object). Merging one route's parameters into another's adds the terms it
lacks and recurses into nested lists for the terms both define.
"""

from __future__ import annotations

import copy

from docviewer.tree import Element, ElementKind, Node, TermPair, tag_pairs


def merge_definition_lists(source: Element, dest: Element) -> None:
    """Merge the terms of ``source`` into ``dest`` in place.

    Terms only ``source`` defines are deep-copied into ``dest``. For terms
    both define, the first nested definition list of each is merged
    recursively; when either side has no nested list, ``dest`` keeps its own
    description. ``dest`` is rewritten with its terms sorted by text.

    Parameters
    ----------
    source : Element
        Definition list supplying terms; never modified.
    dest : Element
        Definition list receiving terms.
    """
    source_pairs = _pairs_by_term(source)
    dest_pairs = _pairs_by_term(dest)

    for term in sorted(source_pairs):
        if term not in dest_pairs:
            dest_pairs[term] = copy.deepcopy(source_pairs[term])
            continue
        nested_source = _nested_list(source_pairs[term].definition)
        nested_dest = _nested_list(dest_pairs[term].definition)
        if nested_source is not None and nested_dest is not None:
            merge_definition_lists(nested_source, nested_dest)

    children: list[Node] = []
    for term in sorted(dest_pairs):
        pair = dest_pairs[term]
        children.append(pair.term)
        children.extend(pair.definition)
    dest.children[:] = children


def _pairs_by_term(element: Element) -> dict[str, TermPair]:
    return {pair.text: pair for pair in tag_pairs(element)}


def _nested_list(definition: list[Node]) -> Element | None:
    """Return the first definition list among ``definition``'s nodes."""
    for node in definition:
        if isinstance(node, Element) and node.is_kind(ElementKind.DEFINITION_LIST):
            return node
    return None


__all__ = ["merge_definition_lists"]
