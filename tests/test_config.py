from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from html_toc.config import (
    ConfigError,
    TocConfig,
    apply_overrides,
    attribute_key,
    attribute_name,
    attribute_overrides,
    build_config,
    load_config,
    normalize_config,
    option_name,
    resolve_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".html-toc.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_defaults():
    config = TocConfig()

    assert config.content_target is None
    assert config.selectors == {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
    assert config.nesting_depth == -1
    assert config.slug_length == 40
    assert config.anchors is True
    assert config.anchor_text == "#"
    assert config.ordered_list is False


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("nestingDepth", "nesting-depth"),
        ("contentTarget", "content-target"),
        ("orderedList", "ordered-list"),
        ("anchors", "anchors"),
        ("slug_length", "slug-length"),
    ],
)
def test_attribute_key_is_kebab_cased(name, expected):
    assert attribute_key(name) == expected


def test_attribute_name_and_option_name():
    assert attribute_name("anchorText") == "data-toc-anchor-text"
    assert option_name("anchorText") == "anchor_text"
    assert option_name("anchor-text") == "anchor_text"


def test_attribute_overrides_ignore_unrelated_and_empty_values():
    attributes = {
        "class": ["toc"],
        "data-toc": "",
        "data-toc-anchors": "",
        "data-toc-slug-length": "12",
        "data-other": "x",
    }

    assert attribute_overrides(attributes) == {"slug_length": "12"}


def test_precedence_attributes_over_options_over_defaults():
    defaults = TocConfig(anchor_text="§", slug_length=10, nesting_depth=3)

    config = resolve_config(
        defaults,
        {"slugLength": 20, "nestingDepth": 2},
        {"data-toc-nesting-depth": "1"},
    )

    assert config.anchor_text == "§"
    assert config.slug_length == 20
    assert config.nesting_depth == 1


def test_snake_case_options_are_accepted():
    config = resolve_config(options={"ordered_list": True, "anchor_text": "¶"})

    assert config.ordered_list is True
    assert config.anchor_text == "¶"


def test_unknown_options_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="html_toc.config"):
        config = resolve_config(options={"colour": "red"})

    assert config == normalize_config(TocConfig())
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("true", True),
        ("YES", True),
        (" 1 ", True),
        (1, True),
        ("no", False),
        ("", False),
        (False, False),
    ],
)
def test_boolean_options_are_coerced(value, expected):
    assert resolve_config(options={"anchors": value}).anchors is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("2", 2), (" 0 ", 0), ("-1", -1), ("2.7", 2), ("deep", 0), (None, 0), (True, 0)],
)
def test_nesting_depth_is_coerced(value, expected):
    assert normalize_config(TocConfig(nesting_depth=value)).nesting_depth == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("5", 5), (0, 0), (-3, 0), ("long", 0), ("inf", 0)],
)
def test_slug_length_is_coerced(value, expected):
    assert normalize_config(TocConfig(slug_length=value)).slug_length == expected


def test_selector_strings_are_resolved():
    config = resolve_config(options={"selectors": "h2$1; h3$2;"})

    assert config.selectors == {"h2": 1, "h3": 2}


def test_empty_content_target_means_whole_document():
    assert resolve_config(options={"contentTarget": ""}).content_target is None


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-toc]
        selectors = "h2$1;h3$2"
        nesting_depth = 2
        slug-length = 12
        anchors = false
        anchor_text = "¶"
        ordered_list = "yes"
        content_target = "main"
        """,
    )

    config = load_config(tmp_path)

    assert config == TocConfig(
        content_target="main",
        selectors={"h2": 1, "h3": 2},
        nesting_depth=2,
        slug_length=12,
        anchors=False,
        anchor_text="¶",
        ordered_list=True,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [html-toc]
        nesting_depth = 0
        """,
    )

    assert load_config(tmp_path).nesting_depth == 0


def test_config_is_found_in_parent_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-toc]
        ordered_list = true
        """,
    )
    nested = tmp_path / "site" / "pages"
    nested.mkdir(parents=True)

    assert load_config(nested).ordered_list is True


def test_pyproject_without_table_falls_back_to_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "demo"
        """,
    )

    assert load_config(tmp_path) == TocConfig()


def test_invalid_toml_is_skipped(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.html-toc\n")

    assert load_config(tmp_path) == TocConfig()


def test_unknown_keys_raise_config_error(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-toc]
        unknown = 1
        """,
    )

    with pytest.raises(ConfigError, match="tool.html-toc"):
        load_config(tmp_path)


def test_non_table_raises_config_error(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        html-toc = "nope"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_apply_overrides_ignores_none():
    config = TocConfig()

    assert apply_overrides(config, nesting_depth=None) is config
    assert apply_overrides(config, nesting_depth=1).nesting_depth == 1


def test_build_config_applies_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-toc]
        nesting_depth = 4
        anchors = false
        """,
    )

    config = build_config(tmp_path, nesting_depth="2", ordered_list=None)

    assert config.nesting_depth == 2
    assert config.anchors is False
    assert config.ordered_list is False
