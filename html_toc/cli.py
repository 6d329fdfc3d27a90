"""
Inserts a table of contents into an HTML file.
The result is printed to stdout, or written back to the file with --in-place.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ParseFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    write_document,
)
from .parser import find_context, parse_file
from .registry import IdentifierRegistry
from .toc import table_of_contents

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="html-toc")
@click.option("--selectors", help='Selector to depth map, e.g. "h2$1;h3$2"')
@click.option("--nesting-depth", type=int, help="Maximum nesting depth (0 disables nesting)")
@click.option("--slug-length", type=int, help="Maximum identifier slug length (0 is unlimited)")
@click.option("--anchors/--no-anchors", default=None, help="Insert anchor links into headings")
@click.option("--anchor-text", help="Text of the inserted anchor links")
@click.option(
    "--ordered-list/--unordered-list", default=None, help="Render an <ol> instead of a <ul>"
)
@click.option("--content-target", help="CSS selector of the element(s) to scan")
@click.option("--target", help="CSS selector of the element the TOC is appended to")
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing it")
@click.option("--verbose", "-v", is_flag=True, help="Log diagnostics to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    selectors: str | None = None,
    nesting_depth: int | None = None,
    slug_length: int | None = None,
    anchors: bool | None = None,
    anchor_text: str | None = None,
    ordered_list: bool | None = None,
    content_target: str | None = None,
    target: str | None = None,
    in_place: bool = False,
    verbose: bool = False,
):
    """
    Entry point for generating a table of contents in an HTML file.

    Options override the ``[tool.html-toc]`` project configuration;
    ``data-toc-*`` attributes on the target element override both.

    Args:
        filepath: Path to the HTML file to process.
        selectors: Selector to depth specification.
        nesting_depth: Maximum nesting depth; negative is unlimited.
        slug_length: Maximum slug length; 0 is unlimited.
        anchors: Whether to insert anchor links into headings.
        anchor_text: Text of the inserted anchor links.
        ordered_list: Whether to render an ordered list.
        content_target: CSS selector restricting the scanned content.
        target: CSS selector of the element receiving the list.
        in_place: Rewrite the file atomically instead of printing.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path, the target selector or the
            configuration is invalid.
        click.ClickException: If the file is too large, cannot be parsed, or
            changes while being processed.

    Examples:
        html-toc index.html --target nav --nesting-depth 2
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            selectors=selectors,
            nesting_depth=nesting_depth,
            slug_length=slug_length,
            anchors=anchors,
            anchor_text=anchor_text,
            ordered_list=ordered_list,
            content_target=content_target,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = parse_file(filepath)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        post_parse_stat = collect_file_stat(filepath)
        ensure_file_unchanged(initial_stat, post_parse_stat, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        context = find_context(document, target)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    table_of_contents(context, defaults=config, registry=IdentifierRegistry())

    if in_place:
        try:
            write_document(filepath, str(document), post_parse_stat)
        except IOError as error:
            raise click.ClickException(str(error)) from error
    else:
        click.echo(str(document))


if __name__ == "__main__":
    cli()
