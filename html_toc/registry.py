"""Unique identifier assignment for headings."""

from __future__ import annotations

import re

from .constants import FALLBACK_IDENTIFIER, SLUG_SEPARATOR
from .models import SlugRecord
from .slugify import slugify

_NUMERAL_SUFFIX = re.compile(rf"{re.escape(SLUG_SEPARATOR)}[0-9]+$")


class IdentifierRegistry:
    """Hand out identifiers that are unique within one rendering session.

    Records are kept in assignment order and are only dropped by `reset`. Two
    tables of contents rendered into the same page should share a registry so
    their anchors cannot collide.

    Examples:
        registry = IdentifierRegistry()
        registry.assign("Hello, World!").identifier  # "hello-world"
        registry.assign("Hello, World!").identifier  # "hello-world-1"
        registry.assign("").identifier  # "toc"
    """

    def __init__(self, slug_length: int = 0):
        self.slug_length = slug_length
        self._records: list[SlugRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return any(record.identifier == identifier for record in self._records)

    @property
    def records(self) -> tuple[SlugRecord, ...]:
        return tuple(self._records)

    @property
    def identifiers(self) -> list[str]:
        return [record.identifier for record in self._records]

    def assign(self, title: str, slug_length: int | None = None) -> SlugRecord:
        """Register `title` and return its record.

        The base identifier is the slug of `title` (``"toc"`` when there is
        nothing to slug). Any ``-<digits>`` tail is stripped to find the root
        form; when the root, alone or numbered, is already registered, the new
        identifier is the root numbered one past the highest numeral in use.

        Args:
            title: Heading text.
            slug_length: Overrides the registry's slug length for this call;
                zero means unbounded.

        Returns:
            SlugRecord: The appended record.
        """
        length = self.slug_length if slug_length is None else slug_length
        slug = slugify(title, max_length=length) if title else ""
        if not slug:
            slug = FALLBACK_IDENTIFIER

        root = _NUMERAL_SUFFIX.sub("", slug)
        pattern = re.compile(
            rf"^{re.escape(root)}(?:{re.escape(SLUG_SEPARATOR)}([0-9]+))?$", re.IGNORECASE
        )

        numerals = []
        for record in self._records:
            match = pattern.match(record.identifier)
            if match:
                numerals.append(int(match.group(1)) if match.group(1) else 0)

        identifier = f"{root}{SLUG_SEPARATOR}{max(numerals) + 1}" if numerals else slug

        record = SlugRecord(title=title, identifier=identifier)
        self._records.append(record)
        return record

    def reset(self) -> None:
        """Forget every assigned identifier."""
        self._records.clear()


_default_registry = IdentifierRegistry()


def default_registry() -> IdentifierRegistry:
    """Return the registry shared by invocations that do not bring their own."""
    return _default_registry


def reset_registry() -> None:
    _default_registry.reset()
