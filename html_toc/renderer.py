"""Materialize table of contents trees as HTML."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from .constants import ANCHOR_CLASS, HTML_PARSER, ITEM_CLASS, LINK_CLASS, LIST_CLASS
from .models import ListItem, ListNode


def _new_document() -> BeautifulSoup:
    return BeautifulSoup("", HTML_PARSER)


def render_list(tree: ListNode, document: BeautifulSoup | None = None) -> Tag:
    """Build the ``<ul>``/``<ol>`` element for `tree`.

    Args:
        tree: Root list to render.
        document: Soup used as the tag factory; a fresh one when omitted.

    Returns:
        Tag: Detached list element, ready to be appended anywhere.
    """
    document = document if document is not None else _new_document()
    element = document.new_tag("ol" if tree.ordered else "ul", attrs={"class": LIST_CLASS})
    for item in tree.items:
        element.append(render_item(item, document))
    return element


def render_item(item: ListItem, document: BeautifulSoup) -> Tag:
    element = document.new_tag("li", attrs={"class": ITEM_CLASS})

    if item.href:
        link = document.new_tag("a", attrs={"class": LINK_CLASS, "href": item.href})
        link.string = item.label or item.href
        element.append(link)
    elif item.label:
        element.string = item.label

    if item.children is not None:
        element.append(render_list(item.children, document))

    return element


def insert_anchor(
    node: Tag, identifier: str, text: str, document: BeautifulSoup | None = None
) -> Tag:
    """Append an ``<a class="toc-anchor">`` target for `identifier` to `node`."""
    document = document if document is not None else _new_document()
    anchor = document.new_tag(
        "a", attrs={"class": ANCHOR_CLASS, "href": f"#{identifier}", "id": identifier}
    )
    anchor.string = text
    node.append(anchor)
    return anchor


def tree_to_html(tree: ListNode) -> str:
    """Serialize `tree` on its own, without a surrounding document."""
    return str(render_list(tree))
