"""Table of contents invocation on a parsed document."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from .config import TocConfig, resolve_config
from .generator import build_toc_tree
from .models import HeadingItem, SlugRecord
from .parser import document_root, find_context, parse_html
from .registry import IdentifierRegistry, default_registry
from .renderer import insert_anchor, render_list
from .scanner import SoupSource, scan_headings
from .selectors import format_selectors

logger = logging.getLogger(__name__)


def _owner_document(node: Tag) -> Tag:
    while node.parent is not None:
        node = node.parent
    return node


def resolve_scopes(content_target: object, document: Tag) -> list[Tag]:
    """Resolve a configured content target to the elements to scan.

    Elements are used as given and strings are evaluated as CSS selectors
    against `document`. A missing target, or a selector matching nothing,
    falls back to the whole document.
    """
    if isinstance(content_target, Tag):
        return [content_target]

    if isinstance(content_target, str):
        try:
            scopes = document.select(content_target)
        except SelectorSyntaxError as error:
            logger.warning("Invalid content target %r: %s", content_target, error)
            scopes = []
        if scopes:
            return scopes
        logger.warning(
            "Content target %r matched nothing, scanning the whole document", content_target
        )
    elif isinstance(content_target, (list, tuple)):
        scopes = [scope for scope in content_target if isinstance(scope, Tag)]
        if scopes:
            return scopes
    elif content_target is not None:
        logger.warning(
            "Unsupported content target %r, scanning the whole document", content_target
        )

    if isinstance(document, BeautifulSoup):
        return [document_root(document)]
    return [document]


def table_of_contents(
    context: Tag,
    options: Mapping[str, object] | None = None,
    *,
    defaults: TocConfig | None = None,
    registry: IdentifierRegistry | None = None,
) -> Tag:
    """Render a table of contents and append it to `context`.

    Options are merged from `defaults`, then `options`, then the
    ``data-toc-*`` attributes of `context`. Matched headings receive anchor
    targets when ``anchors`` is enabled.

    Args:
        context: Element the generated list is appended to.
        options: Caller options keyed by camelCase or snake_case names, e.g.
            ``{"nestingDepth": 2, "contentTarget": "article"}``.
        defaults: Base configuration, e.g. loaded from a project file.
        registry: Identifier registry. Defaults to the shared module-level
            registry, so repeated invocations on one page never reuse an
            identifier.

    Returns:
        Tag: The appended ``<ul>`` or ``<ol>`` element.

    Examples:
        document = parse_html(markup)
        table_of_contents(document.select_one("nav"), {"selectors": "h2$1;h3$2"})
    """
    config = resolve_config(defaults, options, context.attrs)
    registry = registry if registry is not None else default_registry()
    document = _owner_document(context)
    factory = document if isinstance(document, BeautifulSoup) else None

    logger.debug("Scanning with selectors %s", format_selectors(config.selectors))
    source = SoupSource(resolve_scopes(config.content_target, document))
    headings = scan_headings(source, config.selectors)

    def add_anchor(heading: HeadingItem, record: SlugRecord) -> None:
        insert_anchor(heading.node, record.identifier, config.anchor_text, factory)

    tree = build_toc_tree(
        headings,
        config,
        registry=registry,
        on_heading=add_anchor if config.anchors else None,
    )

    element = render_list(tree, factory)
    context.append(element)
    logger.debug("Appended a table of contents with %d headings", len(headings))
    return element


def generate_toc_html(
    html: str,
    options: Mapping[str, object] | None = None,
    *,
    target: str | None = None,
    defaults: TocConfig | None = None,
    registry: IdentifierRegistry | None = None,
) -> str:
    """Parse `html`, insert a table of contents and serialize the result.

    Args:
        html: Document markup.
        options: Caller options, as for `table_of_contents`.
        target: CSS selector of the context element; see `find_context`.
        defaults: Base configuration.
        registry: Identifier registry. A fresh one is used when omitted,
            since the document is rendered in isolation.

    Returns:
        str: The serialized document.

    Raises:
        ValueError: If `target` matches nothing.

    Examples:
        generate_toc_html("<nav data-toc></nav><h1>Intro</h1>")
    """
    document = parse_html(html)
    context = find_context(document, target)
    table_of_contents(
        context,
        options,
        defaults=defaults,
        registry=registry if registry is not None else IdentifierRegistry(),
    )
    return str(document)
