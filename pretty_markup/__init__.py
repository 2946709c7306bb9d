"""
pretty-markup: Pretty-printer and minifier for XML, JSON, CSS and SQL.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    pretty-markup feed.xml
    pretty-markup --minify styles.css

Library Usage:
    from pretty_markup import pretty_sql, pretty_xml, minify_xml

    print(pretty_xml("<a><b>1</b></a>"))
    print(pretty_sql("SELECT a, b FROM t WHERE a = 1"))

    engine = Prettifier(FormatterConfig(indent_spaces=4))
    print(engine.format(text, "css"))
"""

from .config import ConfigError, FormatterConfig
from .css_format import pretty_css
from .engine import Prettifier
from .exceptions import (
    DepthExceededError,
    FormatError,
    InvalidJsonError,
    UnsupportedLanguageError,
)
from .indent import IndentTable, build_indent_table
from .json_format import pretty_json
from .minifier import minify_css, minify_json, minify_sql, minify_xml
from .sql_format import is_subquery, pretty_sql, split_sql
from .xml_format import pretty_xml, split_xml

__version__ = "0.1.0"

__all__ = [
    # Pretty-printers
    "pretty_xml",
    "pretty_json",
    "pretty_css",
    "pretty_sql",
    # Minifiers
    "minify_xml",
    "minify_json",
    "minify_css",
    "minify_sql",
    # Engine and building blocks
    "Prettifier",
    "FormatterConfig",
    "IndentTable",
    "build_indent_table",
    "split_xml",
    "split_sql",
    "is_subquery",
    # Exceptions
    "ConfigError",
    "DepthExceededError",
    "FormatError",
    "InvalidJsonError",
    "UnsupportedLanguageError",
    # Version
    "__version__",
]
