"""Slug generation for heading text."""

from __future__ import annotations

import re
import unicodedata

from .constants import SLUG_SEPARATOR

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_INELIGIBLE = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")


def slugify(text: str, separator: str = SLUG_SEPARATOR, max_length: int = 0) -> str:
    """Make a string URL friendly.

    Decomposes accented characters and drops their combining marks, lowercases
    and trims the text, removes everything that is not an ASCII letter, digit
    or space, and replaces whitespace runs with `separator`. The result is cut
    to `max_length` characters without regard for word boundaries.

    Args:
        text: Heading text to convert.
        separator: Replacement for whitespace runs.
        max_length: Maximum slug length; zero or a negative value means
            unbounded.

    Returns:
        str: The slug. Empty when `text` has no eligible characters.

    Examples:
        slugify("Hello, World!")  # "hello-world"
        slugify("Café au lait", max_length=4)  # "cafe"
        slugify("¿¡!?")  # ""
    """
    slug = unicodedata.normalize("NFD", str(text))
    slug = _COMBINING_MARKS.sub("", slug)
    slug = slug.lower().strip()
    slug = _INELIGIBLE.sub("", slug)
    slug = _WHITESPACE.sub(separator, slug)

    if max_length > 0:
        slug = slug[:max_length]

    return slug
