"""Heading discovery in document order."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from .models import HeadingItem

logger = logging.getLogger(__name__)


class NodeSource(Protocol):
    """What the scanner needs from a document tree."""

    def select(self, matcher: str) -> Iterable[Any]:
        """Return the descendants of the scope matching `matcher`."""

    def order_key(self, node: Any) -> tuple[int, ...]:
        """Return the node's sibling indices from the document root down."""

    def text(self, node: Any) -> str:
        """Return the node's display text."""


class SoupSource:
    """`NodeSource` over one or more BeautifulSoup scope elements.

    Matchers are CSS selectors evaluated by soupsieve. Sibling indices count
    element siblings only, so text and comments between headings do not shift
    the order keys. Element positions are computed once per parent and
    cached, so the tree must not be restructured while the source is in use.

    Args:
        scopes: Elements whose descendants are scanned.
    """

    def __init__(self, scopes: Iterable[Tag]):
        self.scopes = list(scopes)
        self._positions: dict[int, int] = {}

    def select(self, matcher: str) -> list[Tag]:
        matches: list[Tag] = []
        seen: set[int] = set()
        for scope in self.scopes:
            try:
                found = scope.select(matcher)
            except SelectorSyntaxError as error:
                logger.warning("Skipping invalid selector %r: %s", matcher, error)
                return []
            for node in found:
                if id(node) not in seen:
                    seen.add(id(node))
                    matches.append(node)
        return matches

    def order_key(self, node: Tag) -> tuple[int, ...]:
        indices = []
        current = node
        while current.parent is not None:
            indices.append(self._position(current))
            current = current.parent
        return tuple(reversed(indices))

    def _position(self, node: Tag) -> int:
        # Indexes every element child of the parent on first visit.
        if id(node) not in self._positions:
            siblings = (child for child in node.parent.children if isinstance(child, Tag))
            for index, sibling in enumerate(siblings):
                self._positions[id(sibling)] = index
        return self._positions[id(node)]

    def text(self, node: Tag) -> str:
        return node.get_text()


def scan_headings(source: NodeSource, selectors: Mapping[str, int]) -> list[HeadingItem]:
    """Collect every node matched by `selectors`, sorted into document order.

    Matchers are visited in declaration order and a node is claimed by the
    first matcher that finds it, so its depth comes from the earliest
    declared selector. The collection is then stable-sorted by order key,
    comparing sibling indices numerically.

    Args:
        source: Document capability used to find and locate nodes.
        selectors: Matcher to depth map, as returned by `parse_selectors`.

    Returns:
        list[HeadingItem]: Headings in document order.

    Examples:
        scan_headings(SoupSource([soup.body]), {"h2": 1, "h3": 2})
    """
    items: list[HeadingItem] = []
    claimed: set[int] = set()

    for matcher, depth in selectors.items():
        for node in source.select(matcher):
            if id(node) in claimed:
                logger.debug("%r matched a node already claimed by an earlier selector", matcher)
                continue
            claimed.add(id(node))
            items.append(
                HeadingItem(
                    node=node,
                    order_key=source.order_key(node),
                    depth=depth,
                    title=source.text(node),
                )
            )

    items.sort(key=lambda item: item.order_key)
    logger.debug("Found %d headings for %d selectors", len(items), len(selectors))
    return items
