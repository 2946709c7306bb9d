"""Constants used across the pretty-markup package."""

from __future__ import annotations

from .config import MAX_DEPTH_LIMIT, FormatterConfig

DEFAULT_CONFIG = FormatterConfig()

# Indentation defaults
DEFAULT_INDENT_UNIT = DEFAULT_CONFIG.indent_chars
DEFAULT_MAX_DEPTH = DEFAULT_CONFIG.max_depth
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Preferred boundary marker for the splitters; see markers.pick_marker for
# input that already contains it.
FRAGMENT_MARKER = "\x00"

SUPPORTED_LANGUAGES = ("xml", "json", "css", "sql")
LANGUAGE_EXTENSIONS = {
    ".xml": "xml",
    ".xsd": "xml",
    ".xsl": "xml",
    ".xslt": "xml",
    ".svg": "xml",
    ".wsdl": "xml",
    ".xhtml": "xml",
    ".json": "json",
    ".css": "css",
    ".sql": "sql",
}
