from pretty_markup.indent import DEFAULT_INDENT_TABLE
from pretty_markup.models import FragmentKind, XmlWalkerContext
from pretty_markup.xml_format import _advance_xml


def test_advance_open_tag_increments_after_emitting():
    ctx = XmlWalkerContext()
    out: list[str] = []

    kind = _advance_xml(ctx, "<a>", DEFAULT_INDENT_TABLE, out)

    assert kind is FragmentKind.OPEN_TAG
    assert out == ["\n", "<a>"]
    assert ctx.depth == 1
    assert ctx.previous == "<a>"


def test_advance_close_tag_decrements_before_emitting():
    ctx = XmlWalkerContext(depth=2, previous="<b/>")
    out: list[str] = []

    kind = _advance_xml(ctx, "</a>", DEFAULT_INDENT_TABLE, out)

    assert kind is FragmentKind.CLOSE_TAG
    assert out == ["\n  ", "</a>"]
    assert ctx.depth == 1


def test_advance_paired_tag_stays_on_the_same_line():
    ctx = XmlWalkerContext(depth=2, previous="<a>")
    out: list[str] = []

    kind = _advance_xml(ctx, "</a>", DEFAULT_INDENT_TABLE, out)

    assert kind is FragmentKind.PAIRED_TAG
    assert out == ["</a>"]
    assert ctx.depth == 1


def test_advance_paired_tag_inside_comment_keeps_depth():
    ctx = XmlWalkerContext(depth=1, in_comment=True, previous="<a>")
    out: list[str] = []

    _advance_xml(ctx, "</a>", DEFAULT_INDENT_TABLE, out)

    assert out == ["</a>"]
    assert ctx.depth == 1


def test_advance_comment_open_and_close():
    ctx = XmlWalkerContext(depth=1)
    out: list[str] = []

    assert _advance_xml(ctx, "<!-- ", DEFAULT_INDENT_TABLE, out) is FragmentKind.COMMENT_OPEN
    assert ctx.in_comment is True

    assert _advance_xml(ctx, "<b>", DEFAULT_INDENT_TABLE, out) is FragmentKind.OPEN_TAG
    assert ctx.depth == 1

    assert _advance_xml(ctx, "</b> -->", DEFAULT_INDENT_TABLE, out) is FragmentKind.COMMENT_CLOSE
    assert ctx.in_comment is False
    assert ctx.depth == 1
    assert "".join(out) == "\n  <!-- <b></b> -->"


def test_advance_processing_instruction_is_indented_inside_comment():
    ctx = XmlWalkerContext(depth=1, in_comment=True)
    out: list[str] = []

    _advance_xml(ctx, "<?pi?>", DEFAULT_INDENT_TABLE, out)

    assert out == ["\n  ", "<?pi?>"]
    assert ctx.in_comment is True


def test_advance_self_closing_tag_keeps_depth():
    ctx = XmlWalkerContext(depth=3)
    out: list[str] = []

    kind = _advance_xml(ctx, "<br/>", DEFAULT_INDENT_TABLE, out)

    assert kind is FragmentKind.SELF_CLOSING_TAG
    assert ctx.depth == 3
