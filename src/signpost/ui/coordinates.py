"""Coordinate extraction for log messages.

Matches ``(x, y)`` pairs of signed integers with optional whitespace after the
comma, e.g. ``(3, -4)`` or ``(-12,7)``.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

COORDINATE_PATTERN = re.compile(r"\((-?\d+),\s*(-?\d+)\)")

DEFAULT_HIGHLIGHT = '<span style="color: darkgreen">{match}</span>'


def extract_coordinates(text: str, highlight_template: str = DEFAULT_HIGHLIGHT) -> Tuple[str, Optional[str]]:
    """Wrap every coordinate pair in highlight markup.

    Returns:
        (highlighted_text, first_match) where first_match is the first pair as it
        appeared in the input, or None when the text holds no coordinates.
    """
    first: Optional[str] = None

    def _wrap(m: re.Match) -> str:
        nonlocal first
        if first is None:
            first = m.group(0)
        return highlight_template.replace("{match}", m.group(0))

    return COORDINATE_PATTERN.sub(_wrap, text), first

