"""XML pretty-printing by fragment splitting and depth tracking.

No real XML parsing happens here. The text is cut in front of every tag and
namespace attribute, each piece is classified by the substrings it contains,
and a small state machine decides how far to indent it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .indent import DEFAULT_INDENT_TABLE, IndentTable, apply_transition
from .models import DepthChange, FragmentKind, Placement, Transition, XmlWalkerContext

logger = logging.getLogger(__name__)

INTER_TAG_WHITESPACE = re.compile(r">\s*<")
BOUNDARY_PATTERN = re.compile(r"(?=<|xmlns:|xmlns=)")

OPEN_NAME_PATTERN = re.compile(r"^<(\w[\w:\-.,]*)")
CLOSE_NAME_PATTERN = re.compile(r"^</(\w[\w:\-.,]*)")
START_TAG_PATTERN = re.compile(r"<\w")

COMMENT_CLOSERS = ("-->", "]>")

XML_TRANSITIONS = {
    FragmentKind.COMMENT_OPEN: Transition(Placement.INDENTED),
    FragmentKind.COMMENT: Transition(Placement.INDENTED),
    FragmentKind.COMMENT_CLOSE: Transition(Placement.INLINE),
    FragmentKind.PAIRED_TAG: Transition(Placement.INLINE, DepthChange.EMIT_THEN_DECREMENT),
    FragmentKind.OPEN_TAG: Transition(Placement.INDENTED, DepthChange.EMIT_THEN_INCREMENT),
    FragmentKind.INLINE_ELEMENT: Transition(Placement.INDENTED),
    FragmentKind.CLOSE_TAG: Transition(Placement.INDENTED, DepthChange.DECREMENT_THEN_EMIT),
    FragmentKind.SELF_CLOSING_TAG: Transition(Placement.INDENTED),
    FragmentKind.PROCESSING_INSTRUCTION: Transition(Placement.INDENTED),
    FragmentKind.NAMESPACE_DECL: Transition(Placement.INDENTED),
    FragmentKind.OTHER: Transition(Placement.INLINE),
}

# Element markup inside a comment is passed through as-is.
XML_COMMENT_TRANSITIONS = {
    **XML_TRANSITIONS,
    FragmentKind.PAIRED_TAG: Transition(Placement.INLINE),
    FragmentKind.OPEN_TAG: Transition(Placement.INLINE),
    FragmentKind.INLINE_ELEMENT: Transition(Placement.INLINE),
    FragmentKind.CLOSE_TAG: Transition(Placement.INLINE),
    FragmentKind.SELF_CLOSING_TAG: Transition(Placement.INLINE),
}


def split_xml(text: str) -> list[str]:
    """Split XML text into fragments that each start at a structural boundary.

    Whitespace between ``>`` and ``<`` is removed, then the text is cut in
    front of every ``<`` and every ``xmlns:``/``xmlns=`` attribute.

    Args:
        text: XML text to split.

    Returns:
        list[str]: Fragments in input order. The first fragment holds whatever
            precedes the first tag and may be empty.

    Examples:
        split_xml("<a> <b/></a>")  # ["", "<a>", "<b/>", "</a>"]
        split_xml('<a xmlns="u">')  # ["", "<a ", 'xmlns="u">']
    """
    collapsed = INTER_TAG_WHITESPACE.sub("><", text)
    return BOUNDARY_PATTERN.split(collapsed)


def _is_paired_close(previous: str | None, fragment: str) -> bool:
    if previous is None:
        return False
    open_match = OPEN_NAME_PATTERN.match(previous)
    close_match = CLOSE_NAME_PATTERN.match(fragment)
    if not open_match or not close_match:
        return False
    return open_match.group(1) == close_match.group(1)


def classify_xml_fragment(fragment: str, previous: str | None = None) -> FragmentKind:
    """Classify an XML fragment, checking rules in priority order.

    Args:
        fragment: Fragment to classify.
        previous: Fragment immediately before it, used to spot an element
            whose end tag directly follows its start tag.

    Returns:
        FragmentKind: The first matching kind.

    Examples:
        classify_xml_fragment("<a>")  # FragmentKind.OPEN_TAG
        classify_xml_fragment("</a>", previous="<a>")  # FragmentKind.PAIRED_TAG
        classify_xml_fragment("<!-- note -->")  # FragmentKind.COMMENT
    """
    if "<!" in fragment:
        if any(closer in fragment for closer in COMMENT_CLOSERS) or "!DOCTYPE" in fragment:
            return FragmentKind.COMMENT
        return FragmentKind.COMMENT_OPEN

    if any(closer in fragment for closer in COMMENT_CLOSERS):
        return FragmentKind.COMMENT_CLOSE

    if _is_paired_close(previous, fragment):
        return FragmentKind.PAIRED_TAG

    opens = START_TAG_PATTERN.search(fragment) is not None
    closes = "</" in fragment
    if opens and not closes and "/>" not in fragment:
        return FragmentKind.OPEN_TAG
    if opens and closes:
        return FragmentKind.INLINE_ELEMENT
    if closes:
        return FragmentKind.CLOSE_TAG
    if "/>" in fragment:
        return FragmentKind.SELF_CLOSING_TAG
    if "<?" in fragment:
        return FragmentKind.PROCESSING_INSTRUCTION
    if "xmlns:" in fragment or "xmlns=" in fragment:
        return FragmentKind.NAMESPACE_DECL
    return FragmentKind.OTHER


def xml_transition(kind: FragmentKind, in_comment: bool) -> Transition:
    table = XML_COMMENT_TRANSITIONS if in_comment else XML_TRANSITIONS
    return table[kind]


def _advance_xml(
    ctx: XmlWalkerContext, fragment: str, table: IndentTable, out: list[str]
) -> FragmentKind:
    """Emit one fragment and update the walker context.

    Args:
        ctx: Walker context; depth, comment flag and previous fragment are updated.
        fragment: Fragment to emit.
        table: Indentation strings.
        out: Output buffer.

    Returns:
        FragmentKind: The kind the fragment was classified as.
    """
    kind = classify_xml_fragment(fragment, ctx.previous)
    transition = xml_transition(kind, ctx.in_comment)
    ctx.depth = apply_transition(out, table, fragment, transition, ctx.depth)

    if kind is FragmentKind.COMMENT_OPEN:
        ctx.in_comment = True
    elif kind in (FragmentKind.COMMENT, FragmentKind.COMMENT_CLOSE):
        ctx.in_comment = False

    ctx.previous = fragment
    return kind


def render_xml(
    fragments: Iterable[str],
    table: IndentTable | None = None,
    ctx: XmlWalkerContext | None = None,
) -> str:
    """Render XML fragments with one indented line per structural element.

    Args:
        fragments: Fragments produced by `split_xml`.
        table: Indentation strings; defaults to two-space indentation.
        ctx: Walker context to use, mainly so callers can inspect the final
            depth. A fresh context is created when omitted.

    Returns:
        str: Indented XML without a leading newline.

    Raises:
        DepthExceededError: If nesting exceeds the table and its overflow
            policy is ``"error"``.
    """
    if table is None:
        table = DEFAULT_INDENT_TABLE
    if ctx is None:
        ctx = XmlWalkerContext()
    out: list[str] = []

    for fragment in fragments:
        _advance_xml(ctx, fragment, table, out)

    if ctx.depth != 0:
        logger.debug("XML walk finished at depth %d", ctx.depth)

    rendered = "".join(out)
    return rendered[1:] if rendered.startswith("\n") else rendered


def pretty_xml(text: str, table: IndentTable | None = None) -> str:
    """Pretty-print XML text.

    Args:
        text: XML text, possibly minified.
        table: Indentation strings; defaults to two-space indentation.

    Returns:
        str: Indented XML.

    Examples:
        pretty_xml("<a><b>1</b></a>")  # "<a>\\n  <b>1</b>\\n</a>"
    """
    fragments = split_xml(text)
    logger.debug("Split XML into %d fragments", len(fragments))
    return render_xml(fragments, table)
