"""Selector to depth resolution."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from .constants import DEFAULT_SELECTORS

logger = logging.getLogger(__name__)

_DEPTH_SUFFIX = re.compile(r"\$([0-9]+)$")


def coerce_depth(value: object) -> int:
    """Coerce a selector depth to a positive integer, falling back to 1."""
    if isinstance(value, bool):
        return 1
    try:
        depth = int(str(value).strip())
    except ValueError:
        return 1
    return depth if depth > 0 else 1


def parse_selectors(value: object = None) -> dict[str, int]:
    """Resolve a selector specification into an ordered matcher to depth map.

    Strings are split on ``;`` and each entry is read as
    ``<matcher>$<depth>``; the depth defaults to 1 when the suffix is missing.
    Lists and tuples are read entry by entry the same way, mappings are taken
    as already resolved. Matchers are kept verbatim apart from trimming.

    A matcher declared twice keeps its first position and its last depth.
    Blank entries and entries with an empty matcher are dropped with a
    warning; nothing raises.

    Args:
        value: Selector string, sequence of entries, mapping, or None for the
            default ``h1`` to ``h6`` map.

    Returns:
        dict[str, int]: Matchers in declaration order with their depths.

    Examples:
        parse_selectors("h1$1; h2$2; .note:not(.aside)$3")
        parse_selectors({"h2": 1, "h3": "2"})
    """
    if value is None:
        value = DEFAULT_SELECTORS

    if isinstance(value, str):
        value = value.split(";")

    if isinstance(value, Mapping):
        resolved: dict[str, int] = {}
        for matcher, depth in value.items():
            key = str(matcher).strip()
            if not key:
                logger.warning("Ignoring selector with an empty matcher (depth %r)", depth)
                continue
            resolved[key] = coerce_depth(depth)
        return resolved

    if not isinstance(value, (list, tuple)):
        logger.warning("Unsupported selector specification %r, using defaults", value)
        return parse_selectors(DEFAULT_SELECTORS)

    resolved = {}
    for raw_entry in value:
        entry = str(raw_entry).strip()
        if not entry:
            # Trailing ";" produces blank entries, which are expected.
            continue

        depth_match = _DEPTH_SUFFIX.search(entry)
        matcher = _DEPTH_SUFFIX.sub("", entry).strip()
        if not matcher:
            logger.warning("Ignoring selector entry %r without a matcher", entry)
            continue

        resolved[matcher] = coerce_depth(depth_match.group(1)) if depth_match else 1

    return resolved


def format_selectors(selectors: Mapping[str, int]) -> str:
    """Serialize a selector map back into its ``;``-delimited string form."""
    return "".join(f"{matcher}${depth};" for matcher, depth in selectors.items())
