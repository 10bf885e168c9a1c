"""Display-width helpers for status bar, message bar and banner text.

The text area maps one code point to one column. The chrome around it
(filenames, status messages, the welcome banner) is measured by terminal
display width instead, so a wide character in a filename cannot push the
status bar past the right edge of the screen.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    first = g[0]
    cp = ord(first)
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0
    if len(g) > 1:
        # Emoji presentation selector or ZWJ sequence.
        if "\ufe0f" in g or "\u200d" in g:
            return 2
        if unicodedata.category(first).startswith("M"):
            return 0
    return max(_wcwidth.wcwidth(first), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*."""
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(text))
    return _cache_width(text, total)


# ---------------------------------------------------------------------------
# truncate_to_width / center
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int) -> str:
    """Return the longest prefix of *text* at most *max_width* columns wide.

    The cut is made on a grapheme boundary.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if cols + w > max_width:
            break
        result.append(g)
        cols += w
    return "".join(result)


def center(text: str, width: int) -> str:
    """Pad *text* with spaces so it sits in the middle of *width* columns.

    Text wider than *width* is returned unpadded; callers truncate.
    """
    text_width = visible_width(text)
    if text_width >= width:
        return text
    left = (width - text_width) // 2
    right = width - text_width - left
    return " " * left + text + " " * right
