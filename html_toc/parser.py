"""HTML parsing utilities."""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from .constants import HTML_PARSER
from .exceptions import ParseFileError
from .filesystem import safe_read


def parse_html(content: str) -> BeautifulSoup:
    """Parse markup into a BeautifulSoup document."""
    return BeautifulSoup(content, HTML_PARSER)


def document_root(document: BeautifulSoup) -> Tag:
    """Return the element scanned when no content target is configured.

    Falls back from ``<body>`` to the document itself for fragments parsed
    without one.
    """
    if document.body is not None:
        return document.body
    return document


def find_context(document: BeautifulSoup, target: str | None = None) -> Tag:
    """Locate the element a table of contents is appended to.

    Args:
        document: Parsed document.
        target: CSS selector of the context element. When omitted, the first
            element carrying a ``data-toc`` attribute is used, then ``<body>``.

    Returns:
        Tag: The context element.

    Raises:
        ValueError: If `target` is given but matches nothing.

    Examples:
        find_context(parse_html(markup), "#sidebar")
    """
    if target:
        try:
            context = document.select_one(target)
        except SelectorSyntaxError as error:
            raise ValueError(f"Invalid target selector {target!r}: {error}") from error
        if context is None:
            raise ValueError(f"No element matches the target selector {target!r}")
        return context

    marked = document.find(attrs={"data-toc": True})
    if marked is not None:
        return marked
    return document_root(document)


def parse_file(filepath: Path) -> BeautifulSoup:
    """Read and parse an HTML file.

    Args:
        filepath: Path to the HTML file.

    Returns:
        BeautifulSoup: Parsed document.

    Raises:
        ParseFileError: If the file cannot be read or is not valid UTF-8.

    Examples:
        document = parse_file(Path("index.html"))
    """
    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise ParseFileError(filepath, f"Invalid UTF-8 sequence: {error}") from error
    except IOError as error:
        raise ParseFileError(filepath, str(error)) from error

    return parse_html(content)
