"""Tag definition lists with a CSS class taken from their subsection heading."""

from __future__ import annotations

import collections.abc as cabc

from ._constants import HTML_ATTRIBUTES, INPUT, OUTPUT
from .tree import Element, ElementKind, flatten_to_text
from .tree.models import SECTION_BREAK_KINDS

DEFAULT_LIST_CLASSES: dict[str, str] = {
    INPUT: "input-params",
    OUTPUT: "output-params",
}


def apply_list_classes(
    element: Element,
    list_class: str | None = None,
    *,
    classes: cabc.Mapping[str, str] = DEFAULT_LIST_CLASSES,
) -> None:
    """Style every ``over-text`` under ``element`` after the latest ``head4``.

    Parameters
    ----------
    element : Element
        Parent whose children are walked.
    list_class : str, optional
        Class inherited from an enclosing list; nested lists are styled like
        the list containing them.
    classes : Mapping[str, str], optional
        ``head4`` text to CSS class. Headings not in the mapping leave the
        current class unchanged; ``head1``..``head3`` clear it.
    """
    for child in element.children:
        if not isinstance(child, Element):
            continue
        kind = child.kind
        if kind in SECTION_BREAK_KINDS:
            list_class = None
        elif kind is ElementKind.HEAD4:
            list_class = classes.get(flatten_to_text(child), list_class)
        elif kind is ElementKind.DEFINITION_LIST and list_class:
            child.attributes.setdefault(HTML_ATTRIBUTES, {})["class"] = list_class
            apply_list_classes(child, list_class, classes=classes)


__all__ = ["DEFAULT_LIST_CLASSES", "apply_list_classes"]
