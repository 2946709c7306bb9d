"""Data models for pretty-markup."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto


class FragmentKind(Enum):
    """Classification assigned to each fragment by a walker.

    Attributes:
        COMMENT_OPEN: Opens a comment, CDATA section or declaration.
        COMMENT: Opens and closes a comment, CDATA section or doctype.
        COMMENT_CLOSE: Closes a comment or CDATA section opened earlier.
        PAIRED_TAG: Closing tag matching the open tag right before it.
        OPEN_TAG: Element start tag.
        INLINE_ELEMENT: Start and end tag within one fragment.
        CLOSE_TAG: Element end tag.
        SELF_CLOSING_TAG: Empty element tag (``<x/>``).
        PROCESSING_INSTRUCTION: ``<?...?>`` instruction.
        NAMESPACE_DECL: ``xmlns`` attribute split out of its start tag.
        OTHER: Text that carries no structure.
        SUBQUERY_OPEN: SQL fragment opening a parenthesized ``SELECT``.
        LITERAL: SQL fragment holding quoted literal text.
        CLAUSE: Any other SQL fragment.
        BLOCK_OPEN: CSS fragment opening a ``{`` block.
        BLOCK_CLOSE: CSS fragment closing a block.
        DECLARATION: Any other CSS fragment.
    """

    COMMENT_OPEN = auto()
    COMMENT = auto()
    COMMENT_CLOSE = auto()
    PAIRED_TAG = auto()
    OPEN_TAG = auto()
    INLINE_ELEMENT = auto()
    CLOSE_TAG = auto()
    SELF_CLOSING_TAG = auto()
    PROCESSING_INSTRUCTION = auto()
    NAMESPACE_DECL = auto()
    OTHER = auto()
    SUBQUERY_OPEN = auto()
    LITERAL = auto()
    CLAUSE = auto()
    BLOCK_OPEN = auto()
    BLOCK_CLOSE = auto()
    DECLARATION = auto()


class Placement(Enum):
    """Where an emitted fragment goes relative to the previous one."""

    INDENTED = auto()
    INLINE = auto()


class DepthChange(Enum):
    """How emitting a fragment moves the nesting depth."""

    NO_CHANGE = auto()
    EMIT_THEN_INCREMENT = auto()
    INCREMENT_THEN_EMIT = auto()
    EMIT_THEN_DECREMENT = auto()
    DECREMENT_THEN_EMIT = auto()

    @property
    def decrements(self) -> bool:
        return self in (DepthChange.EMIT_THEN_DECREMENT, DepthChange.DECREMENT_THEN_EMIT)


@dataclass(frozen=True)
class Transition:
    """Emission rule for one fragment kind.

    Attributes:
        placement: Whether the fragment starts a new indented line.
        depth_change: Depth movement around the emission.
    """

    placement: Placement
    depth_change: DepthChange = DepthChange.NO_CHANGE

    def without_depth_change(self) -> Transition:
        return replace(self, depth_change=DepthChange.NO_CHANGE)


@dataclass
class XmlWalkerContext:
    """Encapsulate walker state while rendering XML fragments.

    Attributes:
        depth: Current nesting level.
        in_comment: Whether the walker is inside a comment or CDATA section.
        previous: Fragment handled just before the current one, if any.
    """

    depth: int = 0
    in_comment: bool = False
    previous: str | None = None


@dataclass(frozen=True)
class SqlFragment:
    """A SQL fragment and whether it is quoted literal content.

    Attributes:
        text: Fragment text.
        literal: True when the text sits between single quotes and must be
            emitted untouched.
    """

    text: str
    literal: bool = False


@dataclass
class SqlWalkerContext:
    """Encapsulate walker state while rendering SQL fragments.

    Attributes:
        depth: Current subquery nesting level.
        parenthesis_level: Net count of open parentheses seen so far.
    """

    depth: int = 0
    parenthesis_level: int = 0


@dataclass
class CssWalkerContext:
    depth: int = 0
