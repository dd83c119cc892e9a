"""Read and write parsed doc trees serialised as JSON.

A tree file holds the simple-tree arrays emitted by the POD parser, either as
a bare array or wrapped in an object that also records the module path::

    {"path": "/srv/shop/lib/Shop/Widgets.pm", "tree": ["Document", {}, ...]}
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json

from .exceptions import StructureError
from .tree import Element, document_from_simple_tree, to_simple_tree

if typ.TYPE_CHECKING:
    from pathlib import Path


class TreeFile(msgspec.Struct, forbid_unknown_fields=True):
    """Wrapped tree file payload."""

    tree: list[typ.Any]
    path: str | None = None


_TREE_PAYLOAD = typ.Union[TreeFile, list[typ.Any]]  # noqa: UP007


def load_tree_file(path: Path) -> tuple[Element, str]:
    """Return the root element stored in ``path`` and the module path it documents.

    The module path is the wrapped payload's ``path`` when present, otherwise
    ``path`` itself.

    Raises
    ------
    StructureError
        If the file is not valid JSON of either accepted shape, or the tree is
        malformed.
    """
    try:
        payload = msgspec.json.decode(path.read_bytes(), type=_TREE_PAYLOAD)
    except msgspec.ValidationError as exc:
        msg = f"{path} does not contain a doc tree: {exc}"
        raise StructureError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"{path} is not valid JSON: {exc}"
        raise StructureError(msg) from exc

    if isinstance(payload, TreeFile):
        return document_from_simple_tree(payload.tree), payload.path or str(path)
    return document_from_simple_tree(payload), str(path)


def dump_tree(root: Element) -> str:
    """Return ``root`` as indented simple-tree JSON."""
    encoded = msgspec.json.encode(to_simple_tree(root))
    return msgspec.json.format(encoded, indent=2).decode("utf-8")


__all__ = ["TreeFile", "dump_tree", "load_tree_file"]
