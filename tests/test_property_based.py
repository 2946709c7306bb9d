from __future__ import annotations

import json
import re
import string

from hypothesis import given
from hypothesis import strategies as st
from pretty_markup.indent import IndentTable
from pretty_markup.minifier import minify_css, minify_json, minify_sql, minify_xml
from pretty_markup.models import XmlWalkerContext
from pretty_markup.sql_format import pretty_sql
from pretty_markup.xml_format import _advance_xml, pretty_xml, split_xml

names = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=5)
words = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=8)


def _element(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    return st.one_of(
        st.builds(lambda name: f"<{name}/>", names),
        st.builds(lambda name, text: f"<{name}>{text}</{name}>", names, words),
        st.builds(
            lambda name, inner: f"<{name}>{''.join(inner)}</{name}>",
            names,
            st.lists(children, max_size=4),
        ),
    )


comments = st.builds(lambda text: f"<!-- {text} -->", words)
xml_nodes = st.recursive(
    st.one_of(st.builds(lambda name: f"<{name}/>", names), comments), _element, max_leaves=20
)
xml_documents = st.builds(
    lambda name, inner: f"<{name}>{''.join(inner)}</{name}>", names, st.lists(xml_nodes, max_size=5)
)


@given(xml_documents)
def test_xml_depth_never_negative_and_returns_to_zero(document: str):
    ctx = XmlWalkerContext()
    out: list[str] = []

    for fragment in split_xml(document):
        _advance_xml(ctx, fragment, IndentTable(), out)
        assert ctx.depth >= 0

    assert ctx.depth == 0
    assert ctx.in_comment is False


@given(xml_documents)
def test_pretty_xml_only_adds_whitespace_between_tags(document: str):
    assert minify_xml(pretty_xml(document), preserve_comments=True) == document


@given(xml_documents)
def test_pretty_xml_is_idempotent(document: str):
    pretty = pretty_xml(document)
    assert pretty_xml(pretty) == pretty


@given(xml_documents)
def test_minify_xml_is_idempotent(document: str):
    minified = minify_xml(pretty_xml(document))
    assert minify_xml(minified) == minified


@given(st.text(alphabet="<!-> a\n", max_size=60))
def test_minify_xml_is_idempotent_on_comment_fragments(text: str):
    minified = minify_xml(text)
    assert minify_xml(minified) == minified


@given(st.text(alphabet=string.ascii_letters + " (),\x00", max_size=30))
def test_sql_literal_content_is_left_untouched(content: str):
    query = f"SELECT a FROM t WHERE b = '{content}' AND c = 1"
    collapsed = re.sub(r"\s+", " ", content)

    assert pretty_sql(query) == f"SELECT a\nFROM t\nWHERE b = '{collapsed}'\n    AND c = 1"


@given(st.text())
def test_pretty_sql_never_starts_with_newline(text: str):
    assert not pretty_sql(text).startswith("\n")


@given(st.text())
def test_minify_sql_is_idempotent(text: str):
    minified = minify_sql(text)
    assert minify_sql(minified) == minified


@given(st.text(alphabet="ab \t\n{};:/*", max_size=60))
def test_minify_css_is_idempotent(text: str):
    minified = minify_css(text)
    assert minify_css(minified) == minified


json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(alphabet=string.ascii_letters),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(alphabet=string.ascii_letters), children, max_size=4),
    max_leaves=15,
)


@given(json_values)
def test_minify_json_keeps_value_and_is_idempotent(value):
    minified = minify_json(json.dumps(value, indent=2))

    assert json.loads(minified) == value
    assert minify_json(minified) == minified


@given(
    st.text(alphabet=" \t", min_size=1, max_size=4),
    st.integers(min_value=1, max_value=50),
)
def test_indent_table_entries_are_newline_plus_repeated_unit(unit: str, max_depth: int):
    table = IndentTable(unit, max_depth)

    assert len(table) == max_depth + 1
    for depth in range(max_depth + 1):
        assert table[depth] == "\n" + unit * depth
