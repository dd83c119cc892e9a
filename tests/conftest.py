"""Shared fixtures for docviewer tests.

Trees are written as nested simple-tree arrays, the same shape the POD parser
emits, and converted with :func:`docviewer.tree.document_from_simple_tree`.
The ``pod`` fixture exposes small builders so tests read like the POD they
model.
"""

from __future__ import annotations

import typing as typ

import pytest

from docviewer.tree import Element, document_from_simple_tree


class PodBuilder:
    """Builders for simple-tree arrays."""

    @staticmethod
    def para(text: str) -> list[typ.Any]:
        """Return a ``Para`` array."""
        return ["Para", {}, text]

    @staticmethod
    def heading(level: int, text: str) -> list[typ.Any]:
        """Return a ``headN`` array."""
        return [f"head{level}", {}, text]

    @classmethod
    def dl(cls, *pairs: tuple[str, list[typ.Any] | str]) -> list[typ.Any]:
        """Return an ``over-text`` array from ``(term, content)`` pairs.

        String content is wrapped in a paragraph; list content is used as-is.
        """
        children: list[typ.Any] = []
        for term, content in pairs:
            children.append(["item-text", {"~type": "text"}, term])
            children.append(cls.para(content) if isinstance(content, str) else content)
        return ["over-text", {"indent": 4, "~type": "text"}, *children]

    @staticmethod
    def directive(*payloads: str, target: str = "docviewer") -> list[typ.Any]:
        """Return a ``for`` directive array carrying ``payloads``."""
        return ["for", {"target": target}, *(["Data", {}, p] for p in payloads)]

    @staticmethod
    def document(*children: list[typ.Any] | str) -> Element:
        """Return a ``Document`` element built from simple-tree children."""
        return document_from_simple_tree(["Document", {"start_line": 1}, *children])


@pytest.fixture
def pod() -> type[PodBuilder]:
    """Return the simple-tree builders."""
    return PodBuilder


@pytest.fixture
def widget_tree(pod: type[PodBuilder]) -> list[typ.Any]:
    """Return a module with a documented listing route and a borrowing route."""
    return [
        "Document",
        {"start_line": 1},
        pod.heading(1, "Shop::Widgets"),
        pod.heading(2, "Routes"),
        pod.heading(3, "GET /widgets"),
        pod.para("Lists every widget. TODO: paginate."),
        pod.heading(4, "Input"),
        pod.dl(("limit", "Maximum number of widgets.")),
        pod.heading(4, "Output"),
        pod.dl(("id", "Widget id."), ("name", "Widget name.")),
        pod.heading(3, "GET /widgets/:id"),
        pod.para("Fetches one widget; GET /widgets lists them all."),
        pod.directive("output-from GET /widgets"),
    ]


@pytest.fixture
def widget_document(widget_tree: list[typ.Any]) -> Element:
    """Return :func:`widget_tree` as an element tree."""
    return document_from_simple_tree(widget_tree)
