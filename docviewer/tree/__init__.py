"""Tree model, traversal helpers, and simple-tree conversion."""

from .codec import document_from_simple_tree, from_simple_tree, to_simple_tree
from .models import Element, ElementKind, Node
from .traversal import (
    TermPair,
    children_of,
    find_all,
    flatten_to_text,
    new_definition_list,
    new_heading,
    tag_pairs,
)

__all__ = [
    "Element",
    "ElementKind",
    "Node",
    "TermPair",
    "children_of",
    "document_from_simple_tree",
    "find_all",
    "flatten_to_text",
    "from_simple_tree",
    "new_definition_list",
    "new_heading",
    "tag_pairs",
]
