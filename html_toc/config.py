"""Configuration loading, coercion and merging."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import tomllib

from .constants import (
    DATA_ATTRIBUTE_PREFIX,
    DEFAULT_ANCHOR_TEXT,
    DEFAULT_NESTING_DEPTH,
    DEFAULT_SELECTORS,
    DEFAULT_SLUG_LENGTH,
    TRUTHY_VALUES,
)
from .selectors import parse_selectors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocConfig:
    """Configuration for one table of contents invocation.

    Attributes:
        content_target: Element, CSS selector, or None for the whole document.
        selectors: Matcher to depth map, in declaration order.
        nesting_depth: Deepest nesting level allowed. Negative means
            unlimited, 0 disables nesting.
        slug_length: Maximum slug length; 0 means unlimited.
        anchors: Whether to insert anchor links into matched headings.
        anchor_text: Text of the inserted anchor links.
        ordered_list: Whether to render ``<ol>`` instead of ``<ul>``.

    Examples:
        TocConfig(selectors={"h2": 1, "h3": 2}, nesting_depth=1)
    """

    content_target: object = None
    selectors: dict[str, int] = field(default_factory=lambda: parse_selectors(DEFAULT_SELECTORS))
    nesting_depth: int = DEFAULT_NESTING_DEPTH
    slug_length: int = DEFAULT_SLUG_LENGTH
    anchors: bool = True
    anchor_text: str = DEFAULT_ANCHOR_TEXT
    ordered_list: bool = False


class ConfigError(ValueError):
    """Exception raised when a configuration table is structurally invalid.

    Option values themselves never raise; they are coerced.

    Examples:
        raise ConfigError("Invalid `[tool.html-toc]` settings in pyproject.toml")
    """


def option_name(key: str) -> str:
    """Convert a camelCase or kebab-case option key to its field name.

    Examples:
        option_name("nestingDepth")  # "nesting_depth"
        option_name("nesting-depth")  # "nesting_depth"
    """
    return re.sub(r"([A-Z])", r"_\1", key).lower().replace("-", "_").strip("_")


def attribute_key(name: str) -> str:
    """Convert an option name to the kebab-cased key used in attributes.

    Examples:
        attribute_key("nestingDepth")  # "nesting-depth"
        attribute_key("slug_length")  # "slug-length"
    """
    return option_name(name).replace("_", "-")


def attribute_name(name: str) -> str:
    """Return the ``data-toc-*`` attribute that overrides option `name`."""
    return f"{DATA_ATTRIBUTE_PREFIX}{attribute_key(name)}"


def _coerce_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower().strip() in TRUTHY_VALUES


def _coerce_int(value: object, default: int) -> int:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default


def _coerce_target(value: object) -> object:
    if isinstance(value, (str, list, tuple)) and not value:
        return None
    return value


def _coerce_slug_length(value: object) -> int:
    length = _coerce_int(value, 0)
    return length if length > 0 else 0


_COERCERS = {
    "content_target": _coerce_target,
    "selectors": parse_selectors,
    "nesting_depth": lambda value: _coerce_int(value, 0),
    "slug_length": _coerce_slug_length,
    "anchors": _coerce_bool,
    "anchor_text": lambda value: DEFAULT_ANCHOR_TEXT if value is None else str(value),
    "ordered_list": _coerce_bool,
}

OPTION_NAMES = tuple(item.name for item in fields(TocConfig))


def normalize_config(config: TocConfig) -> TocConfig:
    """Coerce every option of `config` into its expected type and range.

    Booleans accept ``true``, ``yes`` and ``1`` in any case. An unreadable
    ``nesting_depth`` becomes 0, which renders a flat list, and an unreadable
    ``slug_length`` becomes 0, which leaves slugs uncut. Selector
    specifications are resolved with `parse_selectors`.
    """
    changes = {name: coerce(getattr(config, name)) for name, coerce in _COERCERS.items()}
    return replace(config, **changes)


def _normalize_keys(options: Mapping[str, object], source: str) -> dict[str, object]:
    changes = {}
    for key, value in options.items():
        name = option_name(str(key))
        if name not in OPTION_NAMES:
            logger.warning("Ignoring unknown %s option %r", source, key)
            continue
        changes[name] = value
    return changes


def attribute_overrides(attributes: Mapping[str, object]) -> dict[str, object]:
    """Extract option overrides from ``data-toc-*`` element attributes.

    Attributes with an empty value are ignored.

    Args:
        attributes: Element attributes, e.g. a BeautifulSoup ``Tag.attrs``.

    Returns:
        dict[str, object]: Override values keyed by option field name.

    Examples:
        attribute_overrides({"data-toc-nesting-depth": "2", "class": ["toc"]})
        # {"nesting_depth": "2"}
    """
    overrides = {}
    for name in OPTION_NAMES:
        value = attributes.get(attribute_name(name))
        if value is None or value == "":
            continue
        overrides[name] = value
    return overrides


def resolve_config(
    defaults: TocConfig | None = None,
    options: Mapping[str, object] | None = None,
    attributes: Mapping[str, object] | None = None,
) -> TocConfig:
    """Merge defaults, caller options and attribute overrides.

    Attribute overrides win over caller options, which win over defaults.
    The merged configuration is normalized, so no option value is ever
    rejected.

    Args:
        defaults: Base configuration. Defaults to a new `TocConfig`.
        options: Caller options keyed by camelCase or snake_case names.
            Unknown keys are logged and ignored.
        attributes: Element attributes carrying ``data-toc-*`` overrides.

    Returns:
        TocConfig: Normalized configuration.

    Examples:
        resolve_config(options={"nestingDepth": 2}, attributes=tag.attrs)
    """
    config = defaults or TocConfig()
    if options:
        config = replace(config, **_normalize_keys(options, "caller"))
    if attributes:
        config = replace(config, **attribute_overrides(attributes))
    return normalize_config(config)


def load_config(search_path: Path) -> TocConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.html-toc]`` table from `pyproject.toml` and the ``[html-toc]``
    or ``[tool.html-toc]`` table from `.html-toc.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TocConfig: Loaded and normalized configuration.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("site"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "html-toc")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".html-toc.toml",
            table_paths=[("html-toc",), ("tool", "html-toc")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TocConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> TocConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> TocConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return TocConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return TocConfig(**{key.replace("-", "_"): value for key, value in raw_config.items()})
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def apply_overrides(config: TocConfig, **overrides: object) -> TocConfig:
    """Apply override values to a `TocConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        TocConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `TocConfig`.

    Examples:
        updated = apply_overrides(config, nesting_depth=2, anchors=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> TocConfig:
    """Load, override, and normalize configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        TocConfig: Normalized configuration.

    Raises:
        ConfigError: If a configuration file holds an invalid table.

    Examples:
        config = build_config(Path.cwd(), nesting_depth=2, ordered_list=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    return normalize_config(config)
