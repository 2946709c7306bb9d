"""CSS pretty-printing with brace depth tracking."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from functools import lru_cache

from .indent import DEFAULT_INDENT_TABLE, IndentTable, apply_transition
from .markers import pick_marker
from .models import CssWalkerContext, DepthChange, FragmentKind, Placement, Transition

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def css_split_rules(mark: str) -> tuple[tuple[re.Pattern[str], str], ...]:
    """Return the (pattern, replacement) pairs applied in order before splitting."""
    escaped = re.escape(mark)
    return (
        (re.compile(r"\s+"), " "),
        (re.compile(r"\{"), "{" + mark),
        (re.compile(r"\}"), mark + "}" + mark),
        (re.compile(r";"), ";" + mark),
        (re.compile(r"/\*"), mark + "/*"),
        (re.compile(r"\*/"), "*/" + mark),
        (re.compile(rf"{escaped}\s*{escaped}"), mark),
    )


LEADING_NEWLINES = re.compile(r"^\n+")

CSS_TRANSITIONS = {
    FragmentKind.BLOCK_OPEN: Transition(Placement.INDENTED, DepthChange.EMIT_THEN_INCREMENT),
    FragmentKind.BLOCK_CLOSE: Transition(Placement.INDENTED, DepthChange.DECREMENT_THEN_EMIT),
    FragmentKind.DECLARATION: Transition(Placement.INDENTED),
}


def split_css(text: str) -> list[str]:
    """Split CSS text after each ``{`` and ``;``, around ``}`` and around comments.

    Examples:
        split_css("a{color:red}")  # ["a{", "color:red", "}", ""]
    """
    mark = pick_marker(text)
    for pattern, replacement in css_split_rules(mark):
        text = pattern.sub(lambda _match, value=replacement: value, text)
    return text.split(mark)


def classify_css_fragment(fragment: str) -> FragmentKind:
    if "{" in fragment:
        return FragmentKind.BLOCK_OPEN
    if "}" in fragment:
        return FragmentKind.BLOCK_CLOSE
    return FragmentKind.DECLARATION


def render_css(
    fragments: Iterable[str],
    table: IndentTable | None = None,
    ctx: CssWalkerContext | None = None,
) -> str:
    if table is None:
        table = DEFAULT_INDENT_TABLE
    if ctx is None:
        ctx = CssWalkerContext()
    out: list[str] = []

    for fragment in fragments:
        kind = classify_css_fragment(fragment)
        ctx.depth = apply_transition(out, table, fragment, CSS_TRANSITIONS[kind], ctx.depth)

    return LEADING_NEWLINES.sub("", "".join(out))


def pretty_css(text: str, table: IndentTable | None = None) -> str:
    """Pretty-print CSS text.

    Args:
        text: CSS text, possibly minified.
        table: Indentation strings; defaults to two-space indentation.

    Returns:
        str: CSS with one declaration per line and nested blocks indented.

    Examples:
        pretty_css("a{color:red;}")  # "a{\\n  color:red;\\n}\\n"
    """
    fragments = split_css(text)
    logger.debug("Split CSS into %d fragments", len(fragments))
    return render_css(fragments, table)
