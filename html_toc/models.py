"""Data models for html-toc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HeadingItem:
    """A heading found while scanning a document.

    Attributes:
        node: The source node, as handed out by the `NodeSource`.
        order_key: Sibling indices from the document root down to the node.
        depth: Nesting depth resolved from the first matching selector.
        title: Display text of the node.
    """

    node: Any = field(compare=False)
    order_key: tuple[int, ...]
    depth: int
    title: str

    @property
    def dom_index(self) -> str:
        """Dotted form of `order_key`, e.g. ``"2.0.3"``."""
        return ".".join(str(index) for index in self.order_key)


@dataclass(frozen=True)
class SlugRecord:
    """A display title and the identifier assigned to it.

    Attributes:
        title: Heading text the identifier was derived from.
        identifier: Unique anchor identifier, without the leading ``#``.
    """

    title: str
    identifier: str

    @property
    def href(self) -> str:
        return f"#{self.identifier}"


@dataclass
class ListItem:
    """One entry of a table of contents.

    An item with neither `label` nor `href` is a placeholder standing in for a
    heading level the document skipped.

    Attributes:
        label: Text shown for the entry, if any.
        href: Link target, if the entry is a link.
        children: Nested list opened under this entry, if any.
    """

    label: str | None = None
    href: str | None = None
    children: ListNode | None = None

    @property
    def is_placeholder(self) -> bool:
        return not self.label and not self.href


@dataclass
class ListNode:
    """An ordered or unordered list of `ListItem` entries."""

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)

    def append(self, item: ListItem) -> ListItem:
        self.items.append(item)
        return item

    def depth(self) -> int:
        """Number of list levels in this tree, counting this list."""
        nested = [item.children.depth() for item in self.items if item.children is not None]
        return 1 + max(nested, default=0)

    def walk(self):
        """Yield every item of the tree in document order."""
        for item in self.items:
            yield item
            if item.children is not None:
                yield from item.children.walk()
