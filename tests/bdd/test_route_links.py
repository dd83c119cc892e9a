"""Behaviour tests for route anchors, in-prose links, and the sidebar index.

The viewer shows one panel per route and switches panels through anchors, so
the ids in the sidebar index, the keys of the routes map, and the links
generated for route mentions in prose must all agree. These scenarios render
small modules and check that agreement with BeautifulSoup, including when two
modules are rendered on the same page.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_route_links.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docviewer import DocTree

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "route_links.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"children": []}


def _tree(scenario_state: dict[str, typ.Any]) -> list[typ.Any]:
    return ["Document", {"start_line": 1}, *scenario_state["children"]]


def _route_ids(index: str) -> dict[str, str]:
    """Map each route title in ``index`` onto its anchor id."""
    soup = BeautifulSoup(index, "html.parser")
    return {entry["title"]: entry["id"] for entry in soup.select("ul.route-list a")}


@given(parsers.parse('the module "{path}" titled "{title}"'))
def given_module(scenario_state: dict[str, typ.Any], path: str, title: str) -> None:
    """Start a module with a top-level heading."""
    scenario_state["path"] = path
    scenario_state["children"].append(["head1", {}, title])


@given(parsers.parse('it documents the route "{route}"'))
def given_route(scenario_state: dict[str, typ.Any], route: str) -> None:
    """Add a route heading."""
    scenario_state["children"].append(["head3", {}, route])


@given(parsers.parse('that route is described as "{text}"'))
def given_description(scenario_state: dict[str, typ.Any], text: str) -> None:
    """Add a paragraph to the latest route."""
    scenario_state["children"].append(["Para", {}, text])


@when("the module is rendered")
def when_rendered(scenario_state: dict[str, typ.Any]) -> None:
    """Render the module's routes and index."""
    doc = DocTree.from_simple_tree(
        _tree(scenario_state), file_path=scenario_state["path"]
    )
    scenario_state["routes"] = doc.routes
    scenario_state["index"] = doc.index


@when("the module is rendered twice on one page")
def when_rendered_twice(scenario_state: dict[str, typ.Any]) -> None:
    """Render two copies of the module, seeding the second with the first."""
    ids_used: frozenset[str] = frozenset()
    anchors: list[str] = []
    for _ in range(2):
        doc = DocTree.from_simple_tree(
            _tree(scenario_state), file_path=scenario_state["path"], ids_used=ids_used
        )
        anchors.extend(doc.routes)
        _ = doc.index
        ids_used = doc.ids_used
    scenario_state["anchors"] = anchors


@then(parsers.parse('the description of "{route}" links to the panel of "{target}"'))
def then_description_links(
    scenario_state: dict[str, typ.Any], route: str, target: str
) -> None:
    """Verify the prose link points at the anchor the index uses for ``target``."""
    ids = _route_ids(scenario_state["index"])
    fragments = scenario_state["routes"][ids[route]]
    soup = BeautifulSoup("".join(fragments), "html.parser")
    paragraph = soup.find("p")
    assert paragraph is not None, f"expected a description under {route!r}"
    link = paragraph.find("a")
    assert link is not None, "expected the route mention to be linked"
    assert link["href"] == f"#!/{ids[target]}"
    assert ids[target] in scenario_state["routes"], "expected the target panel"


@then(parsers.parse('the sidebar group "{title}" lists "{routes}"'))
def then_sidebar_lists(
    scenario_state: dict[str, typ.Any], title: str, routes: str
) -> None:
    """Verify the index group header and its route entries."""
    soup = BeautifulSoup(scenario_state["index"], "html.parser")
    header = soup.find("a", class_="sidebar-header")
    assert header is not None, "expected a sidebar group header"
    assert header.get_text() == title
    expected = [route.strip() for route in routes.split(",")]
    assert list(_route_ids(scenario_state["index"])) == expected


@then(parsers.parse('the route anchors are "{first}" then "{second}"'))
def then_anchors(scenario_state: dict[str, typ.Any], first: str, second: str) -> None:
    """Verify the anchors of both renderings."""
    assert scenario_state["anchors"] == [first, second]
