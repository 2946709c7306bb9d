from __future__ import annotations

import os

import pytest
from pretty_markup.minifier import minify_sql, minify_xml
from pretty_markup.sql_format import pretty_sql
from pretty_markup.xml_format import pretty_xml

atheris = pytest.importorskip("atheris")


def test_pretty_xml_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    formatted = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        pretty = pretty_xml(text)
        assert isinstance(pretty, str)
        minify_xml(pretty)
        formatted += 1

    assert formatted  # ensure we exercised the loop


def test_pretty_sql_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    formatted = 0

    while provider.remaining_bytes() > 0 and formatted < 64:
        text = provider.ConsumeUnicodeNoSurrogates(64)
        assert not pretty_sql(text).startswith("\n")
        minified = minify_sql(text)
        assert minify_sql(minified) == minified
        formatted += 1

    assert formatted
