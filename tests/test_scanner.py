from __future__ import annotations

import logging
import time

from bs4 import BeautifulSoup

from html_toc.scanner import SoupSource, scan_headings
from html_toc.selectors import parse_selectors


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "lxml")


class FakeSource:
    """Synthetic node source: nodes are (order_key, title) pairs."""

    def __init__(self, matches: dict[str, list[tuple[tuple[int, ...], str]]]):
        self.matches = matches

    def select(self, matcher):
        return self.matches.get(matcher, [])

    def order_key(self, node):
        return node[0]

    def text(self, node):
        return node[1]


def test_headings_are_returned_in_document_order():
    soup = _soup("<h2>B</h2><h1>A</h1><h3>C</h3><h1>D</h1>")

    items = scan_headings(SoupSource([soup.body]), parse_selectors())

    assert [(item.title, item.depth) for item in items] == [
        ("B", 2),
        ("A", 1),
        ("C", 3),
        ("D", 1),
    ]


def test_nested_headings_follow_ancestor_order():
    soup = _soup(
        "<section><h2>First</h2><div><h3>Nested</h3></div></section>"
        "<section><h2>Second</h2></section>"
    )

    items = scan_headings(SoupSource([soup.body]), {"h3": 2, "h2": 1})

    assert [item.title for item in items] == ["First", "Nested", "Second"]


def test_order_keys_are_compared_numerically():
    paragraphs = "".join(f"<p>{index}</p>" for index in range(10))
    soup = _soup(f"<h2>Early</h2>{paragraphs}<h2>Late</h2>")

    items = scan_headings(SoupSource([soup.body]), {"h2": 1})

    assert [item.title for item in items] == ["Early", "Late"]
    assert items[1].order_key[-1] == 11
    assert items[1].dom_index.endswith(".11")


def test_order_key_counts_element_siblings_only():
    soup = _soup("<body>text<!-- note --><h2>Only</h2></body>")
    heading = soup.h2

    key = SoupSource([soup.body]).order_key(heading)

    assert key[-1] == 0


def test_first_declared_selector_claims_node():
    soup = _soup('<h2 class="lead">Lead</h2><h2>Other</h2>')

    items = scan_headings(SoupSource([soup.body]), {"h2": 1, ".lead": 3})

    assert [(item.title, item.depth) for item in items] == [("Lead", 1), ("Other", 1)]


def test_specific_selector_declared_first_wins():
    soup = _soup('<h2 class="lead">Lead</h2><h2>Other</h2>')

    items = scan_headings(SoupSource([soup.body]), {".lead": 3, "h2": 1})

    assert [(item.title, item.depth) for item in items] == [("Lead", 3), ("Other", 1)]


def test_scan_is_limited_to_scopes():
    soup = _soup("<h1>Outside</h1><article><h1>Inside</h1></article>")

    items = scan_headings(SoupSource([soup.article]), {"h1": 1})

    assert [item.title for item in items] == ["Inside"]


def test_overlapping_scopes_record_nodes_once():
    soup = _soup("<article><div><h1>Inside</h1></div></article>")

    items = scan_headings(SoupSource([soup.article, soup.div]), {"h1": 1})

    assert [item.title for item in items] == ["Inside"]


def test_invalid_selector_is_skipped(caplog):
    soup = _soup("<h1>Title</h1>")

    with caplog.at_level(logging.WARNING, logger="html_toc.scanner"):
        items = scan_headings(SoupSource([soup.body]), {"h1[": 1, "h1": 1})

    assert [item.title for item in items] == ["Title"]
    assert "Skipping invalid selector" in caplog.text


def test_empty_document_yields_no_headings():
    soup = _soup("<p>No headings here</p>")

    assert scan_headings(SoupSource([soup.body]), parse_selectors()) == []


def test_synthetic_source_is_sorted_by_key():
    source = FakeSource(
        {
            "a": [((0, 2), "Third"), ((0, 0), "First")],
            "b": [((0, 1), "Second")],
        }
    )

    items = scan_headings(source, {"a": 1, "b": 2})

    assert [(item.title, item.depth) for item in items] == [
        ("First", 1),
        ("Second", 2),
        ("Third", 1),
    ]


def test_scan_scales_linearly_with_sibling_count():
    count = 4000
    body = "".join(f"<h2>Section {index}</h2><p>Text</p>" for index in range(count))
    soup = _soup(body)

    started = time.perf_counter()
    items = scan_headings(SoupSource([soup.body]), {"h2": 1})
    elapsed = time.perf_counter() - started

    assert len(items) == count
    assert items[-1].order_key[-1] == 2 * count - 2
    assert elapsed < 2.0


def test_positions_follow_each_parent_separately():
    soup = _soup("<div><p></p><h2>A</h2></div><div><h2>B</h2></div>")
    source = SoupSource([soup.body])

    first, second = soup.select("h2")

    assert source.order_key(first)[-2:] == (0, 1)
    assert source.order_key(second)[-2:] == (1, 0)
