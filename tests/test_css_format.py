import pytest

from pretty_markup.css_format import classify_css_fragment, pretty_css, render_css, split_css
from pretty_markup.indent import IndentTable
from pretty_markup.models import CssWalkerContext, FragmentKind


def test_split_css_cuts_around_braces():
    assert split_css("a{color:red}") == ["a{", "color:red", "}", ""]


def test_split_css_separates_comments():
    assert split_css("/* c */a{b:c}") == ["", "/* c */", "a{", "b:c", "}", ""]


@pytest.mark.parametrize(
    ("fragment", "expected"),
    [
        ("a{", FragmentKind.BLOCK_OPEN),
        ("@media screen{", FragmentKind.BLOCK_OPEN),
        ("}", FragmentKind.BLOCK_CLOSE),
        ("color:red;", FragmentKind.DECLARATION),
        ("/* c */", FragmentKind.DECLARATION),
    ],
)
def test_classify_css_fragment(fragment, expected):
    assert classify_css_fragment(fragment) is expected


def test_pretty_css_single_rule():
    assert pretty_css("a{color:red;}") == "a{\n  color:red;\n}\n"


def test_pretty_css_nested_at_rule():
    assert pretty_css("@media screen{a{color:red;}}") == (
        "@media screen{\n  a{\n    color:red;\n  }\n}\n"
    )


def test_pretty_css_keeps_comment_on_its_own_line():
    assert pretty_css("/* c */a{b:c}") == "/* c */\na{\n  b:c\n}\n"


def test_pretty_css_custom_unit():
    assert pretty_css("a{b:c;}", IndentTable("\t")) == "a{\n\tb:c;\n}\n"


def test_render_css_returns_to_depth_zero():
    ctx = CssWalkerContext()

    render_css(split_css("a{b{c:d;}e:f;}"), ctx=ctx)

    assert ctx.depth == 0


def test_pretty_css_keeps_nul_characters():
    assert pretty_css("a{content:'\x00';}") == "a{\n  content:'\x00';\n}\n"
