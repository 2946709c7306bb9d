"""
Pretty-prints or minifies XML, JSON, CSS and SQL.
Reads a file (or stdin) and writes the result to stdout, or back to the file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from .config import DEPTH_OVERFLOW_POLICIES, ConfigError, build_config
from .constants import SUPPORTED_LANGUAGES
from .engine import Prettifier
from .exceptions import FormatError
from .filesystem import (
    collect_file_stat,
    detect_language,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_source,
    write_formatted,
)

__all__ = ["cli"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.version_option()
@click.option(
    "--language", "-l", type=click.Choice(SUPPORTED_LANGUAGES), help="Input language"
)
@click.option("--minify", "-m", is_flag=True, help="Minify instead of pretty-printing")
@click.option("--preserve-comments", is_flag=True, help="Keep comments when minifying")
@click.option("--indent-chars", help="Indentation characters")
@click.option("--indent-spaces", type=int, help="Number of spaces per indentation level")
@click.option("--max-depth", type=int, help="Deepest indentation level")
@click.option(
    "--depth-overflow",
    type=click.Choice(DEPTH_OVERFLOW_POLICIES),
    help="Clamp or fail when nesting exceeds --max-depth",
)
@click.option("--in-place", "-i", is_flag=True, help="Rewrite the file instead of printing")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.argument(
    "filepath", default="-", type=click.Path(dir_okay=False, allow_dash=True)
)
def cli(
    filepath: str,
    language: str | None = None,
    minify: bool = False,
    preserve_comments: bool = False,
    indent_chars: str | None = None,
    indent_spaces: int | None = None,
    max_depth: int | None = None,
    depth_overflow: str | None = None,
    in_place: bool = False,
    verbose: bool = False,
):
    """
    Entry point for formatting a file or standard input.

    Args:
        filepath: Path to the file to format, or ``-`` for standard input.
        language: Input language; inferred from the file extension when omitted.
        minify: Minify instead of pretty-printing.
        preserve_comments: Keep comments when minifying XML or CSS.
        indent_chars: Indentation characters per nesting level.
        indent_spaces: Number of spaces per nesting level.
        max_depth: Deepest nesting level with its own indentation.
        depth_overflow: ``clamp`` or ``error`` when nesting exceeds `max_depth`.
        in_place: Rewrite the file with the formatted text.
        verbose: Emit debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path, language or configuration is invalid.
        click.ClickException: If reading, formatting or writing fails.

    Examples:
        pretty-markup feed.xml
        cat query.sql | pretty-markup -l sql
        pretty-markup --minify --in-place styles.css
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)

    from_stdin = filepath == "-"
    if from_stdin and in_place:
        raise click.BadParameter("--in-place requires a file path")
    if from_stdin and language is None:
        raise click.BadParameter("--language is required when reading standard input")

    path: Path | None = None
    if not from_stdin:
        try:
            path = normalize_filepath(filepath)
            language = language or detect_language(path)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            path.parent if path is not None else Path.cwd(),
            indent_chars=indent_chars,
            indent_spaces=indent_spaces,
            max_depth=max_depth,
            depth_overflow=depth_overflow,
            preserve_comments=preserve_comments or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    initial_stat = None
    if path is None:
        content = sys.stdin.read()
    else:
        try:
            max_file_size = get_max_file_size(default=config.max_file_size)
        except ValueError as error:
            raise click.ClickException(str(error)) from error
        try:
            initial_stat = collect_file_stat(path)
            enforce_file_size(initial_stat, max_file_size, path)
            content = read_source(path)
        except IOError as error:
            raise click.ClickException(str(error)) from error

    try:
        formatted = Prettifier(config).format(content, language, minify=minify)
    except FormatError as error:
        raise click.ClickException(str(error)) from error

    if in_place:
        if not formatted.endswith("\n"):
            formatted += "\n"
        try:
            write_formatted(path, formatted, initial_stat)
        except IOError as error:
            raise click.ClickException(str(error)) from error
    else:
        click.echo(formatted)


if __name__ == "__main__":
    cli()
