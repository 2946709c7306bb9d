from pretty_markup.minifier import minify_css, minify_json, minify_sql, minify_xml
from pretty_markup.xml_format import pretty_xml


def test_minify_xml_drops_comments_and_whitespace():
    assert minify_xml("<a>\n  <!-- x -->\n  <b/>\n</a>") == "<a><b/></a>"


def test_minify_xml_preserves_comments():
    assert minify_xml("<a>\n  <!-- x -->\n  <b/>\n</a>", preserve_comments=True) == (
        "<a><!-- x --><b/></a>"
    )


def test_minify_xml_keeps_text_whitespace():
    assert minify_xml("<a>hello world</a>") == "<a>hello world</a>"


def test_minify_xml_undoes_pretty_xml():
    source = '<?xml version="1.0"?><root><item id="1"/><item id="2">text</item></root>'

    assert minify_xml(pretty_xml(source)) == source


def test_minify_xml_handles_long_comment():
    comment = "<!--" + "- x " * 2000 + "-->"

    assert minify_xml(f"<a>{comment}</a>") == "<a></a>"


def test_minify_css_drops_comments():
    assert minify_css("/* c */ a { color: red; }") == "a {color: red;}"


def test_minify_css_preserves_comments():
    assert minify_css("/* c */ a { color: red; }", preserve_comments=True) == (
        "/*c */a {color: red;}"
    )


def test_minify_css_multiline_comment():
    assert minify_css("a{\n/* one\n * two */\nb: c;\n}") == "a{b: c;}"


def test_minify_sql_collapses_whitespace_and_parentheses():
    assert minify_sql("SELECT  a FROM ( SELECT b ) x") == "SELECT a FROM( SELECT b) x"


def test_minify_sql_applies_to_every_parenthesis():
    assert minify_sql("f (a) + g (b)") == "f(a) + g(b)"


def test_minify_json_indented_document():
    source = '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'

    assert minify_json(source) == '{"a": 1,"b":[1, 2]}'


def test_minify_xml_removes_comment_formed_by_removing_another():
    assert minify_xml("<a><!<!-- x -->-- y --></a>") == "<a></a>"


def test_minify_css_removes_comment_formed_by_removing_another():
    assert minify_css("a{color:red}//* a */* b */") == "a{color:red}"


def test_minify_css_removes_comment_formed_by_whitespace_collapse():
    assert minify_css("a */ * b */") == "a *"
