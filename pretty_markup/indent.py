"""Precomputed indentation strings shared by every formatter."""

from __future__ import annotations

import logging

from .constants import DEFAULT_INDENT_UNIT, DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from .exceptions import DepthExceededError
from .models import DepthChange, Placement, Transition

logger = logging.getLogger(__name__)


def build_indent_table(unit: str, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[str, ...]:
    """Build the newline-plus-indentation string for every depth.

    Entry 0 is a bare newline and each following entry appends one `unit`, so
    the table holds ``max_depth + 1`` strings.

    Args:
        unit: Indentation added per nesting level.
        max_depth: Deepest nesting level to precompute.

    Returns:
        tuple[str, ...]: Indentation strings indexed by depth.

    Examples:
        build_indent_table("  ", 2)  # ("\\n", "\\n  ", "\\n    ")
    """
    shifts = ["\n"]
    for depth in range(max_depth):
        shifts.append(shifts[depth] + unit)
    return tuple(shifts)


class IndentTable:
    """Immutable lookup from nesting depth to its line prefix.

    Depths below zero (unbalanced input) use the depth 0 entry. Depths past
    `max_depth` either reuse the deepest entry (``overflow="clamp"``) or raise
    `DepthExceededError` (``overflow="error"``).
    """

    def __init__(
        self,
        unit: str = DEFAULT_INDENT_UNIT,
        max_depth: int = DEFAULT_MAX_DEPTH,
        overflow: str = "clamp",
    ):
        if overflow not in ("clamp", "error"):
            raise ValueError(f"Unknown depth overflow policy: {overflow}")
        if max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must not exceed {MAX_DEPTH_LIMIT}, got {max_depth}")
        self._shifts = build_indent_table(unit, max_depth)
        self.unit = unit
        self.max_depth = max_depth
        self.overflow = overflow

    def __len__(self) -> int:
        return len(self._shifts)

    def __getitem__(self, depth: int) -> str:
        return self._shifts[depth]

    def shift(self, depth: int) -> str:
        if depth < 0:
            return self._shifts[0]
        if depth > self.max_depth:
            if self.overflow == "error":
                raise DepthExceededError(depth, self.max_depth)
            logger.debug("Clamping depth %d to %d", depth, self.max_depth)
            return self._shifts[-1]
        return self._shifts[depth]


DEFAULT_INDENT_TABLE = IndentTable()


def apply_transition(
    out: list[str], table: IndentTable, fragment: str, transition: Transition, depth: int
) -> int:
    """Emit a fragment according to its transition and return the new depth.

    Args:
        out: Output buffer receiving the emitted pieces.
        table: Indentation strings used for indented placement.
        fragment: Fragment text to emit.
        transition: Placement and depth movement for the fragment.
        depth: Depth before the fragment.

    Returns:
        int: Depth after the fragment.

    Raises:
        DepthExceededError: If the fragment is indented past the table and the
            table's overflow policy is ``"error"``.

    Examples:
        apply_transition(out, table, "<a>", Transition(Placement.INDENTED,
                         DepthChange.EMIT_THEN_INCREMENT), 0)  # 1
    """
    change = transition.depth_change
    if change is DepthChange.INCREMENT_THEN_EMIT:
        depth += 1
    elif change is DepthChange.DECREMENT_THEN_EMIT:
        depth -= 1

    if transition.placement is Placement.INDENTED:
        out.append(table.shift(depth))
    out.append(fragment)

    if change is DepthChange.EMIT_THEN_INCREMENT:
        depth += 1
    elif change is DepthChange.EMIT_THEN_DECREMENT:
        depth -= 1
    return depth
