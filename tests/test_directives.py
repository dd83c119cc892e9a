"""Unit tests for :class:`docviewer.merge.DirectiveProcessor`.

These cover the directive grammar, the merge outcomes for borrowed ``Input``
and ``Output`` lists, strict and lenient handling of unresolved references,
and removal of the directive blocks from the tree.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

from docviewer.exceptions import DirectiveError, MergeTargetNotFoundError
from docviewer.merge import DirectiveProcessor, SectionRegistry
from docviewer.merge import directives as directives_module
from docviewer.tree import Element, flatten_to_text

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from conftest import PodBuilder


def _terms(document: Element, section: str, kind: str) -> list[str]:
    target = SectionRegistry(document).lookup(section, kind)
    assert target is not None, f"expected a {kind} list under {section!r}"
    return [
        flatten_to_text(node)
        for node in target.children
        if isinstance(node, Element) and node.name == "item-text"
    ]


def _names(document: Element) -> list[str]:
    return [node.name for node in document.children if isinstance(node, Element)]


def test_output_is_borrowed(widget_document: Element) -> None:
    """The borrowing route gains the listing route's Output terms."""
    merges = DirectiveProcessor(widget_document).run()
    assert merges == 1
    assert _terms(widget_document, "GET /widgets/:id", "Output") == ["id", "name"]


def test_directives_are_removed(widget_document: Element) -> None:
    """No directive block survives processing."""
    DirectiveProcessor(widget_document).run()
    assert "for" not in _names(widget_document), "expected directives excised"
    assert _names(widget_document)[-2:] == ["head4", "over-text"]


def test_input_inserted_before_output(pod: type[PodBuilder]) -> None:
    """Borrowed Input lands ahead of the route's own Output subsection."""
    document = pod.document(
        pod.heading(3, "GET /widgets"),
        pod.heading(4, "Input"),
        pod.dl(("limit", "Max.")),
        pod.heading(3, "POST /widgets"),
        pod.heading(4, "Output"),
        pod.dl(("id", "New id.")),
        pod.directive("input-from GET /widgets"),
    )
    DirectiveProcessor(document).run()
    assert _names(document)[3:] == ["head3", "head4", "over-text", "head4", "over-text"]
    assert _terms(document, "POST /widgets", "Input") == ["limit"]
    assert _terms(document, "POST /widgets", "Output") == ["id"]


def test_multi_line_payload(pod: type[PodBuilder]) -> None:
    """Every line of a payload is a separate directive."""
    document = pod.document(
        pod.heading(3, "GET /a"),
        pod.heading(4, "Input"),
        pod.dl(("q", "Query.")),
        pod.heading(4, "Output"),
        pod.dl(("id", "Id.")),
        pod.heading(3, "GET /b"),
        pod.directive("input-from GET /a\noutput-from GET /a\n"),
    )
    assert DirectiveProcessor(document).run() == 2
    assert _terms(document, "GET /b", "Input") == ["q"]
    assert _terms(document, "GET /b", "Output") == ["id"]


def test_merges_chain_in_document_order(pod: type[PodBuilder]) -> None:
    """A route can borrow from a route that itself borrowed earlier."""
    document = pod.document(
        pod.heading(3, "GET /a"),
        pod.heading(4, "Output"),
        pod.dl(("id", "Id.")),
        pod.heading(3, "GET /b"),
        pod.directive("output-from GET /a"),
        pod.heading(4, "Output"),
        pod.dl(("extra", "Extra.")),
        pod.heading(3, "GET /c"),
        pod.directive("output-from GET /b"),
    )
    DirectiveProcessor(document).run()
    assert _terms(document, "GET /c", "Output") == ["extra", "id"]


def test_unresolved_reference_raises(pod: type[PodBuilder]) -> None:
    """Strict processing rejects references to sections without the list."""
    document = pod.document(
        pod.heading(3, "GET /a"), pod.directive("input-from GET /missing")
    )
    with pytest.raises(MergeTargetNotFoundError) as excinfo:
        DirectiveProcessor(document).run()
    error = excinfo.value
    assert (error.reference, error.kind, error.section) == (
        "GET /missing",
        "Input",
        "GET /a",
    )


def test_unresolved_reference_warns_when_lenient(
    pod: type[PodBuilder], caplog: pytest.LogCaptureFixture
) -> None:
    """Lenient processing logs the problem and still removes the directive."""
    document = pod.document(
        pod.heading(3, "GET /a"), pod.directive("output-from GET /missing")
    )
    with caplog.at_level(logging.WARNING, logger="docviewer.merge.directives"):
        merges = DirectiveProcessor(document, strict=False).run()
    assert merges == 0
    assert "GET /missing" in caplog.text
    assert _names(document) == ["head3"]


def _output_only_document(pod: type[PodBuilder]) -> Element:
    """Return route A with only an Output list and route B borrowing its input."""
    return pod.document(
        pod.heading(3, "A"),
        pod.heading(4, "Output"),
        pod.dl(("x", "1")),
        pod.heading(3, "B"),
        pod.directive("input-from A"),
    )


def test_input_is_not_taken_from_an_output_list(pod: type[PodBuilder]) -> None:
    """``input-from`` only reads the source's Input list, never its Output."""
    document = _output_only_document(pod)
    with pytest.raises(MergeTargetNotFoundError) as excinfo:
        DirectiveProcessor(document).run()
    assert (excinfo.value.reference, excinfo.value.kind) == ("A", "Input")


def test_input_from_output_only_section_is_skipped_when_lenient(
    pod: type[PodBuilder],
) -> None:
    """Lenient processing adds no Input to B and still drops the directive."""
    document = _output_only_document(pod)
    assert DirectiveProcessor(document, strict=False).run() == 0
    assert SectionRegistry(document).lookup("B", "Input") is None
    assert _names(document) == ["head3", "head4", "over-text", "head3"]


def test_strict_failure_keeps_earlier_merges(pod: type[PodBuilder]) -> None:
    """A failing directive leaves earlier merges applied and directives present."""
    document = pod.document(
        pod.heading(3, "GET /a"),
        pod.heading(4, "Output"),
        pod.dl(("id", "Id.")),
        pod.heading(3, "GET /b"),
        pod.directive("output-from GET /a"),
        pod.heading(3, "GET /c"),
        pod.directive("output-from GET /missing"),
    )
    with pytest.raises(MergeTargetNotFoundError):
        DirectiveProcessor(document).run()
    assert _terms(document, "GET /b", "Output") == ["id"]
    assert _names(document).count("for") == 2, "expected no directive excised"


def test_directive_before_any_route(pod: type[PodBuilder]) -> None:
    """A directive with no enclosing route heading is an error."""
    document = pod.document(
        pod.directive("input-from GET /a"),
        pod.heading(3, "GET /a"),
        pod.heading(4, "Input"),
        pod.dl(("q", "Query.")),
    )
    with pytest.raises(DirectiveError, match="before any route heading"):
        DirectiveProcessor(document).run()


def test_unrecognised_lines_are_ignored(pod: type[PodBuilder]) -> None:
    """Lines that are not merge directives are skipped silently."""
    document = pod.document(
        pod.heading(3, "GET /a"), pod.directive("copy-from GET /b", "input-from")
    )
    assert DirectiveProcessor(document).run() == 0
    assert _names(document) == ["head3"]


def test_other_targets_are_left_alone(pod: type[PodBuilder]) -> None:
    """Only blocks aimed at the configured target are processed."""
    document = pod.document(
        pod.heading(3, "GET /a"), pod.directive("<br>", target="html")
    )
    DirectiveProcessor(document).run()
    assert _names(document) == ["head3", "for"]


def test_custom_target(pod: type[PodBuilder]) -> None:
    """The recognised target can be changed."""
    document = pod.document(
        pod.heading(3, "GET /a"),
        pod.heading(4, "Input"),
        pod.dl(("q", "Query.")),
        pod.heading(3, "GET /b"),
        pod.directive("input-from GET /a", target="apidocs"),
    )
    assert DirectiveProcessor(document, target="apidocs").run() == 1


def test_merge_delegates_to_list_union(
    widget_document: Element, mocker: MockerFixture
) -> None:
    """Each resolved directive performs exactly one list merge."""
    spy = mocker.spy(directives_module, "merge_definition_lists")
    DirectiveProcessor(widget_document).run()
    assert spy.call_count == 1
    source, dest = spy.call_args.args
    assert flatten_to_text(source) == flatten_to_text(dest)
