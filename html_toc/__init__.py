"""
html-toc: Table of Contents generator for HTML documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    html-toc index.html --target nav

Library Usage:
    from html_toc import parse_html, table_of_contents

    document = parse_html(markup)
    table_of_contents(document.select_one("nav"), {"nestingDepth": 2})
    html = str(document)
"""

from .config import ConfigError, TocConfig, resolve_config
from .exceptions import HtmlTocError, ParseFileError
from .generator import build_toc_tree
from .models import HeadingItem, ListItem, ListNode, SlugRecord
from .parser import parse_html
from .registry import IdentifierRegistry, default_registry, reset_registry
from .renderer import render_list, tree_to_html
from .scanner import NodeSource, SoupSource, scan_headings
from .selectors import parse_selectors
from .slugify import slugify
from .toc import generate_toc_html, table_of_contents

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "table_of_contents",
    "generate_toc_html",
    "build_toc_tree",
    "scan_headings",
    "parse_selectors",
    "slugify",
    "parse_html",
    "render_list",
    "tree_to_html",
    # Identifier registry
    "IdentifierRegistry",
    "default_registry",
    "reset_registry",
    # Data models
    "TocConfig",
    "HeadingItem",
    "SlugRecord",
    "ListItem",
    "ListNode",
    "NodeSource",
    "SoupSource",
    # Configuration
    "resolve_config",
    # Exceptions
    "ConfigError",
    "HtmlTocError",
    "ParseFileError",
    # Version
    "__version__",
]
