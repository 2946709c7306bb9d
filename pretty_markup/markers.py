"""Fragment markers for the regex splitters."""

from __future__ import annotations

from itertools import chain

from .constants import FRAGMENT_MARKER
from .exceptions import FormatError

# Private-use code points, tried in order when the input already holds NUL
FALLBACK_MARKER_RANGES = (range(0xE000, 0xF900), range(0xF0000, 0x10FFFE))


def pick_marker(text: str) -> str:
    """Return a character that does not occur in `text`.

    Splitters insert the marker at each boundary and split on it, so it must
    never collide with the input itself.

    Raises:
        FormatError: If every candidate character already occurs in `text`.

    Examples:
        pick_marker("SELECT 1")  # "\\x00"
        pick_marker("a\\x00b")  # "\\ue000"
    """
    if FRAGMENT_MARKER not in text:
        return FRAGMENT_MARKER

    used = set(text)
    for code_point in chain(*FALLBACK_MARKER_RANGES):
        marker = chr(code_point)
        if marker not in used:
            return marker
    raise FormatError("No free character left to mark fragment boundaries")
