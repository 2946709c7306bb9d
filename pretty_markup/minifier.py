"""Minifiers for XML, JSON, CSS and SQL.

Each minifier is an ordered chain of regex substitutions, repeated until the
text stops changing, so running one twice gives the same result as running
it once.
"""

from __future__ import annotations

import re

XML_COMMENT_PATTERN = re.compile(r"<![ \r\n\t]*(--([^\-]|-[^\-])*--[ \r\n\t]*)>")
CSS_COMMENT_PATTERN = re.compile(r"/\*([^*]|\*+[^*/])*\*+/")
INTER_TAG_WHITESPACE = re.compile(r">\s*<")

JSON_RULES = (
    (re.compile(r"\s*\{\s+"), "{"),
    (re.compile(r"\s*\[\Z"), "["),
    (re.compile(r"\[\s*"), "["),
    (re.compile(r":\s*\["), ":["),
    (re.compile(r"\s+\}\s*"), "}"),
    (re.compile(r"\s*\]\s*"), "]"),
    (re.compile(r"\"\s*,"), '",'),
    (re.compile(r",\s*\""), ',"'),
    (re.compile(r"\"\s*:"), '":'),
    (re.compile(r":\s*\""), ':"'),
    (re.compile(r":\s*\["), ":["),
    (re.compile(r",\s*\["), ",["),
    (re.compile(r",\s{2,}"), ", "),
    (re.compile(r"\]\s*,\s*\["), "],["),
)

CSS_RULES = (
    (re.compile(r"\s+"), " "),
    (re.compile(r"\{\s+"), "{"),
    (re.compile(r"\}\s+"), "}"),
    (re.compile(r";\s+"), ";"),
    (re.compile(r"/\*\s+"), "/*"),
    (re.compile(r"\*/\s+"), "*/"),
)

SQL_RULES = (
    (re.compile(r"\s+"), " "),
    (re.compile(r"\s+\("), "("),
    (re.compile(r"\s+\)"), ")"),
)


def _apply(rules, text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def _until_stable(minify_once, text: str) -> str:
    # Dropping a comment can join its neighbours into a new one, so a single
    # pass is not always final. A pass either shortens the text or only turns
    # other whitespace into plain spaces, so the loop ends.
    while True:
        minified = minify_once(text)
        if minified == text:
            return minified
        text = minified


def minify_xml(text: str, preserve_comments: bool = False) -> str:
    """Minify XML by removing comments and whitespace between tags.

    Args:
        text: XML text.
        preserve_comments: Keep ``<!-- -->`` comments when True.

    Returns:
        str: Minified XML.

    Examples:
        minify_xml("<a>\\n  <!-- x -->\\n  <b/>\\n</a>")  # "<a><b/></a>"
    """

    def minify_once(source: str) -> str:
        if not preserve_comments:
            source = XML_COMMENT_PATTERN.sub("", source)
        return INTER_TAG_WHITESPACE.sub("><", source)

    return _until_stable(minify_once, text)


def minify_json(text: str) -> str:
    """Minify JSON text. The input is assumed to be valid JSON already."""
    return _until_stable(lambda source: _apply(JSON_RULES, source), text)


def minify_css(text: str, preserve_comments: bool = False) -> str:
    """Minify CSS by removing comments and collapsing whitespace.

    Args:
        text: CSS text.
        preserve_comments: Keep ``/* */`` comments when True.

    Returns:
        str: Minified CSS with no leading or trailing whitespace.

    Examples:
        minify_css("/* c */ a { color: red; }")  # "a {color: red;}"
    """

    def minify_once(source: str) -> str:
        if not preserve_comments:
            source = CSS_COMMENT_PATTERN.sub("", source)
        return _apply(CSS_RULES, source).strip()

    return _until_stable(minify_once, text)


def minify_sql(text: str) -> str:
    return _until_stable(lambda source: _apply(SQL_RULES, source), text)
