"""Formatter engine bundling a configuration with its indentation table."""

from __future__ import annotations

from .config import FormatterConfig, normalize_config, validate_config
from .constants import SUPPORTED_LANGUAGES
from .css_format import pretty_css
from .exceptions import UnsupportedLanguageError
from .indent import IndentTable
from .json_format import pretty_json
from .minifier import minify_css, minify_json, minify_sql, minify_xml
from .sql_format import pretty_sql
from .xml_format import pretty_xml


class Prettifier:
    """Pretty-print or minify XML, JSON, CSS and SQL with one configuration.

    The indentation table is built once when the engine is created and shared
    by every call; all other state lives inside each call, so one engine can
    be used from several threads.

    Examples:
        engine = Prettifier(FormatterConfig(indent_spaces=4))
        engine.xml("<a><b/></a>")
        engine.format("SELECT a FROM t", "sql", minify=True)
    """

    def __init__(self, config: FormatterConfig | None = None):
        config = normalize_config(config or FormatterConfig())
        validate_config(config)
        self.config = config
        self.indent_table = IndentTable(
            config.indent_chars, config.max_depth, config.depth_overflow
        )

    def xml(self, text: str) -> str:
        return pretty_xml(text, self.indent_table)

    def json(self, value: object) -> str | None:
        return pretty_json(value, self.config.indent_chars)

    def css(self, text: str) -> str:
        return pretty_css(text, self.indent_table)

    def sql(self, text: str) -> str:
        return pretty_sql(text, self.indent_table)

    def xml_min(self, text: str, preserve_comments: bool | None = None) -> str:
        if preserve_comments is None:
            preserve_comments = self.config.preserve_comments
        return minify_xml(text, preserve_comments)

    def json_min(self, text: str) -> str:
        return minify_json(text)

    def css_min(self, text: str, preserve_comments: bool | None = None) -> str:
        if preserve_comments is None:
            preserve_comments = self.config.preserve_comments
        return minify_css(text, preserve_comments)

    def sql_min(self, text: str) -> str:
        return minify_sql(text)

    def format(self, text: str, language: str, minify: bool = False) -> str | None:
        """Pretty-print or minify `text` as `language`.

        Args:
            text: Text to format.
            language: One of ``xml``, ``json``, ``css`` or ``sql``.
            minify: Minify instead of pretty-printing.

        Returns:
            str | None: Formatted text; None only when the JSON formatter
                rejects the input type.

        Raises:
            UnsupportedLanguageError: If `language` is not supported.
            FormatError: If the formatter fails.
        """
        language = language.lower()
        if language not in SUPPORTED_LANGUAGES:
            raise UnsupportedLanguageError(language)

        suffix = "_min" if minify else ""
        return getattr(self, f"{language}{suffix}")(text)
