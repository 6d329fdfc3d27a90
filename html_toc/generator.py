"""Table of contents tree construction."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .config import TocConfig
from .models import HeadingItem, ListItem, ListNode, SlugRecord
from .registry import IdentifierRegistry, default_registry

HeadingCallback = Callable[[HeadingItem, SlugRecord], None]


def _clamp(depth: int, ceiling: int) -> int:
    if ceiling > 0 and depth > ceiling:
        return ceiling + 1
    return depth


def build_toc_tree(
    items: Iterable[HeadingItem],
    config: TocConfig | None = None,
    registry: IdentifierRegistry | None = None,
    on_heading: HeadingCallback | None = None,
) -> ListNode:
    """Turn document-ordered headings into a nested list tree.

    Each heading gets an identifier from `registry` and becomes a link item.
    Deeper headings open one sub-list per level, with empty placeholder items
    standing in for levels the document skipped; shallower headings close
    sub-lists. With a positive ``nesting_depth`` no more than
    ``nesting_depth + 1`` list levels are opened and deeper headings collapse
    into the deepest allowed list. A ``nesting_depth`` of 0 produces a flat
    list.

    Args:
        items: Headings in document order.
        config: Configuration supplying ``nesting_depth``, ``slug_length`` and
            ``ordered_list``. Defaults to a new `TocConfig` when omitted.
        registry: Registry used for identifiers. Defaults to the shared
            module-level registry.
        on_heading: Called with each heading and its record once the
            identifier is assigned, e.g. to insert an anchor into the source.

    Returns:
        ListNode: The root list. Empty when `items` is empty.

    Examples:
        tree = build_toc_tree(scan_headings(source, config.selectors), config)
    """
    config = config or TocConfig()
    registry = registry if registry is not None else default_registry()
    ceiling = config.nesting_depth

    root = ListNode(ordered=config.ordered_list)
    lists: list[ListNode] = []
    last_depth = 1
    last_item: ListItem | None = None

    for heading in items:
        record = registry.assign(heading.title, slug_length=config.slug_length)
        item = ListItem(label=record.title, href=record.href)
        depth = heading.depth

        if on_heading is not None:
            on_heading(heading, record)

        if ceiling != 0:
            if depth > last_depth:
                starting_item = last_item
                if starting_item is None:
                    starting_item = root.append(ListItem())

                steps = _clamp(depth, ceiling) - last_depth
                for step in range(steps):
                    sub_list = ListNode(ordered=config.ordered_list)
                    starting_item.children = sub_list
                    lists.append(sub_list)
                    if step + 1 < steps:
                        starting_item = sub_list.append(ListItem())

            elif depth < last_depth:
                for _ in range(_clamp(last_depth, ceiling) - depth):
                    if lists:
                        lists.pop()

        (lists[-1] if lists else root).append(item)

        last_depth = depth
        last_item = item

    return root
