"""SQL pretty-printing by keyword splitting and subquery depth tracking."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from .indent import DEFAULT_INDENT_TABLE, IndentTable, apply_transition
from .markers import pick_marker
from .models import (
    DepthChange,
    FragmentKind,
    Placement,
    SqlFragment,
    SqlWalkerContext,
    Transition,
)

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")
QUOTE_BOUNDARY = re.compile(r"(?=')")
SUBQUERY_PATTERN = re.compile(r"\(\s*SELECT")
LEADING_NEWLINES = re.compile(r"^\n+")
NEWLINE_RUNS = re.compile(r"\n+")


@lru_cache(maxsize=256)
def _compile(pattern: str, mark: str) -> re.Pattern[str]:
    return re.compile(pattern.replace("{mark}", re.escape(mark)), re.IGNORECASE)


@dataclass(frozen=True)
class SqlSplitRule:
    """One substitution step of the SQL clause splitter.

    Attributes:
        name: Short identifier for the rule.
        pattern: Case-insensitive pattern to replace; ``{mark}`` stands for
            the fragment marker.
        replacement: Replacement text; ``{mark}`` is the fragment marker and
            ``{tab}`` the indentation unit.
        after: Name of the rule whose output this rule rewrites, if any.
    """

    name: str
    pattern: str
    replacement: str
    after: str | None = None

    def apply(self, text: str, tab: str, mark: str) -> str:
        replacement = self.replacement.format(mark=mark, tab=tab)
        return _compile(self.pattern, mark).sub(lambda _match: replacement, text)


def _rule(name: str, pattern: str, replacement: str, after: str | None = None) -> SqlSplitRule:
    return SqlSplitRule(name, pattern, replacement, after)


def _uppercase(keyword: str) -> SqlSplitRule:
    return _rule(keyword.lower(), rf" {keyword} ", f" {keyword} ")


# Applied strictly in order. Each rule sees the text produced by all the rules
# before it, so reordering changes the output.
SQL_SPLIT_RULES: tuple[SqlSplitRule, ...] = (
    _rule("whitespace", r"\s+", " "),
    _rule("and", r" AND ", "{mark}{tab}{tab}AND "),
    _rule("between", r" BETWEEN ", "{mark}{tab}BETWEEN "),
    _rule("case", r" CASE ", "{mark}{tab}CASE "),
    _rule("else", r" ELSE ", "{mark}{tab}ELSE "),
    _rule("end", r" END ", "{mark}{tab}END "),
    _rule("from", r" FROM ", "{mark}FROM "),
    _rule("group_by", r" GROUP\s+BY\b\s*", "{mark}GROUP BY "),
    _rule("having", r" HAVING ", "{mark}HAVING "),
    _uppercase("IN"),
    _rule("join", r" JOIN ", "{mark}JOIN "),
    # Qualified joins were split in two by the generic rule; glue them back.
    _rule("cross_join", r" CROSS{mark}+JOIN ", "{mark}CROSS JOIN ", after="join"),
    _rule("inner_join", r" INNER{mark}+JOIN ", "{mark}INNER JOIN ", after="join"),
    _rule("left_join", r" LEFT{mark}+JOIN ", "{mark}LEFT JOIN ", after="join"),
    _rule("right_join", r" RIGHT{mark}+JOIN ", "{mark}RIGHT JOIN ", after="join"),
    _rule("on", r" ON ", "{mark}{tab}ON "),
    _rule("or", r" OR ", "{mark}{tab}{tab}OR "),
    _rule("order_by", r" ORDER\s+BY\b\s*", "{mark}ORDER BY "),
    _rule("over", r" OVER ", "{mark}{tab}OVER "),
    _rule("subquery", r"\(\s*SELECT ", "{mark}(SELECT "),
    _rule("select_after_paren", r"\)\s*SELECT ", "){mark}SELECT "),
    _rule("then", r" THEN ", " THEN{mark}{tab}"),
    _rule("union", r" UNION ", "{mark}UNION{mark}"),
    _rule("using", r" USING ", "{mark}USING "),
    _rule("when", r" WHEN ", "{mark}{tab}WHEN "),
    _rule("where", r" WHERE ", "{mark}WHERE "),
    _rule("with", r" WITH ", "{mark}WITH "),
    _uppercase("ALL"),
    _uppercase("AS"),
    _uppercase("ASC"),
    _uppercase("DESC"),
    _uppercase("DISTINCT"),
    _uppercase("EXISTS"),
    _uppercase("NOT"),
    _uppercase("NULL"),
    _uppercase("LIKE"),
    _rule("select", r"\s*SELECT ", "SELECT "),
    _rule("collapse_marks", r"{mark}+", "{mark}"),
)

SQL_TRANSITIONS = {
    FragmentKind.SUBQUERY_OPEN: Transition(Placement.INDENTED, DepthChange.INCREMENT_THEN_EMIT),
    FragmentKind.LITERAL: Transition(Placement.INLINE, DepthChange.DECREMENT_THEN_EMIT),
    FragmentKind.CLAUSE: Transition(Placement.INDENTED, DepthChange.EMIT_THEN_DECREMENT),
}


def split_sql_clauses(text: str, tab: str) -> list[str]:
    """Split unquoted SQL text at clause and keyword boundaries.

    Args:
        text: SQL text containing no quoted literals.
        tab: Indentation unit baked into continuation keywords such as ``AND``.

    Returns:
        list[str]: Clause fragments in input order.

    Examples:
        split_sql_clauses("SELECT a FROM t WHERE b = 1", "  ")
        # ["SELECT a", "FROM t", "WHERE b = 1"]
    """
    mark = pick_marker(text + tab)
    for rule in SQL_SPLIT_RULES:
        text = rule.apply(text, tab, mark)
    return text.split(mark)


def _split_on_quotes(text: str) -> list[str]:
    collapsed = WHITESPACE_PATTERN.sub(" ", text)
    return QUOTE_BOUNDARY.split(collapsed)


def split_sql_fragments(text: str, tab: str) -> list[SqlFragment]:
    """Split SQL text into fragments, keeping quoted literals whole.

    Args:
        text: SQL text.
        tab: Indentation unit baked into continuation keywords.

    Returns:
        list[SqlFragment]: Fragments in input order; literal content is
            flagged and never split further.
    """
    fragments: list[SqlFragment] = []
    for index, span in enumerate(_split_on_quotes(text)):
        # Odd spans start with an opening quote and run to the closing one
        if index % 2:
            fragments.append(SqlFragment(span, literal=True))
        else:
            fragments.extend(SqlFragment(clause) for clause in split_sql_clauses(span, tab))
    return fragments


def split_sql(text: str, tab: str) -> list[str]:
    """Split SQL text into the fragments the walker emits.

    Examples:
        split_sql("SELECT a FROM t WHERE b = 'x y'", "  ")
        # ["SELECT a", "FROM t", "WHERE b = ", "'x y", "'"]
    """
    return [fragment.text for fragment in split_sql_fragments(text, tab)]


def is_subquery(fragment: str, parenthesis_level: int) -> int:
    """Return the parenthesis level after a fragment.

    A result below 1 means no subquery parenthesis is left open.

    Examples:
        is_subquery("(SELECT a", 0)  # 1
        is_subquery("FROM t) x", 1)  # 0
    """
    return parenthesis_level + fragment.count("(") - fragment.count(")")


def classify_sql_fragment(fragment: str, literal: bool = False) -> FragmentKind:
    if literal or "'" in fragment:
        return FragmentKind.LITERAL
    if SUBQUERY_PATTERN.search(fragment):
        return FragmentKind.SUBQUERY_OPEN
    return FragmentKind.CLAUSE


def _closes_scope(ctx: SqlWalkerContext) -> bool:
    return ctx.parenthesis_level < 1 and ctx.depth > 0


def _advance_sql(
    ctx: SqlWalkerContext, fragment: SqlFragment, table: IndentTable, out: list[str]
) -> FragmentKind:
    """Emit one SQL fragment and update the walker context.

    Args:
        ctx: Walker context; depth and parenthesis level are updated.
        fragment: Fragment to emit.
        table: Indentation strings.
        out: Output buffer.

    Returns:
        FragmentKind: The kind the fragment was classified as.
    """
    text = fragment.text
    if not fragment.literal:
        ctx.parenthesis_level = is_subquery(text, ctx.parenthesis_level)

    kind = classify_sql_fragment(text, fragment.literal)
    if kind is not FragmentKind.LITERAL and "SELECT" in text:
        text = text.replace(",", ",\n" + table.unit * 2)

    transition = SQL_TRANSITIONS[kind]
    if transition.depth_change.decrements and not _closes_scope(ctx):
        transition = transition.without_depth_change()

    ctx.depth = apply_transition(out, table, text, transition, ctx.depth)
    return kind


def render_sql(
    fragments: Iterable[SqlFragment],
    table: IndentTable | None = None,
    ctx: SqlWalkerContext | None = None,
) -> str:
    """Render SQL fragments with one line per clause and indented subqueries.

    Args:
        fragments: Fragments produced by `split_sql_fragments`.
        table: Indentation strings; defaults to two-space indentation.
        ctx: Walker context to use; a fresh context is created when omitted.

    Returns:
        str: Formatted SQL with no blank lines and no leading newline.
    """
    if table is None:
        table = DEFAULT_INDENT_TABLE
    if ctx is None:
        ctx = SqlWalkerContext()
    out: list[str] = []

    for fragment in fragments:
        _advance_sql(ctx, fragment, table, out)

    if ctx.parenthesis_level != 0:
        logger.debug("SQL walk finished with parenthesis level %d", ctx.parenthesis_level)

    rendered = LEADING_NEWLINES.sub("", "".join(out))
    return NEWLINE_RUNS.sub("\n", rendered)


def pretty_sql(text: str, table: IndentTable | None = None) -> str:
    """Pretty-print a SQL statement.

    Args:
        text: SQL text, possibly on a single line.
        table: Indentation strings; defaults to two-space indentation.

    Returns:
        str: Formatted SQL.

    Examples:
        pretty_sql("SELECT a FROM t WHERE b = 1")  # "SELECT a\\nFROM t\\nWHERE b = 1"
    """
    if table is None:
        table = DEFAULT_INDENT_TABLE
    fragments = split_sql_fragments(text, table.unit)
    logger.debug("Split SQL into %d fragments", len(fragments))
    return render_sql(fragments, table)
