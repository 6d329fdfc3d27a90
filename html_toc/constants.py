"""Constants used across the html-toc package."""

from __future__ import annotations

# Option defaults
DEFAULT_SELECTORS = "h1$1;h2$2;h3$3;h4$4;h5$5;h6$6;"
DEFAULT_NESTING_DEPTH = -1
DEFAULT_SLUG_LENGTH = 40
DEFAULT_ANCHOR_TEXT = "#"

# Identifier used when a heading has no sluggable text
FALLBACK_IDENTIFIER = "toc"
SLUG_SEPARATOR = "-"

# Per-invocation overrides are read from ``data-toc-<kebab-option>`` attributes
DATA_ATTRIBUTE_PREFIX = "data-toc-"
TRUTHY_VALUES = ("true", "yes", "1")

# Generated markup
LIST_CLASS = "toc-list"
ITEM_CLASS = "toc-item"
LINK_CLASS = "toc-link"
ANCHOR_CLASS = "toc-anchor"

# Parser and filesystem limits
HTML_PARSER = "lxml"
HTML_EXTENSIONS = (".html", ".htm", ".xhtml")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
