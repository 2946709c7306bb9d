import pytest

from pretty_markup.constants import FRAGMENT_MARKER
from pretty_markup.exceptions import FormatError
from pretty_markup.markers import pick_marker


def test_pick_marker_prefers_nul():
    assert pick_marker("SELECT 1") == FRAGMENT_MARKER


def test_pick_marker_falls_back_to_private_use_character():
    assert pick_marker("a\x00b") == "\ue000"


def test_pick_marker_skips_characters_already_used():
    assert pick_marker("a\x00\ue000") == "\ue001"


def test_pick_marker_fails_when_every_candidate_is_used(monkeypatch):
    monkeypatch.setattr(
        "pretty_markup.markers.FALLBACK_MARKER_RANGES", (range(0xE000, 0xE002),)
    )

    with pytest.raises(FormatError):
        pick_marker("\x00\ue000\ue001")
