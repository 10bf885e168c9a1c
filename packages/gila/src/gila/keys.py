"""Keyboard input decoding for raw terminal byte chunks.

A keypress arrives from the terminal as one chunk of up to
``MAX_KEY_BYTES`` bytes: a printable character, a control chord or a
legacy CSI/SS3 escape sequence. ``decode_key`` turns that chunk into a
single ``KeyCode``: either a Unicode code point or one of the sentinel
values on ``Key``, which live in a band above the Unicode range so the two
can never collide.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyCode = int

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# 8 bytes is longer than any keypress on a standard ~100-key keyboard and
# long enough for any 4-byte UTF-8 code point.
MAX_KEY_BYTES = 8

ESC = 0x1B
BACKSPACE_BYTE = 0x7F
REPLACEMENT_CHAR = 0xFFFD

# Terminals report Ctrl-CHAR by zeroing bits 5 and 6 of CHAR.
CTRL_MASK = 0x1F


def ctrl(ch: str) -> KeyCode:
    """Return the code point a terminal sends for Ctrl + *ch*.

    For example, ``ctrl("q")`` returns ``0x11``.
    """
    return ord(ch) & CTRL_MASK


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


# First value past the Unicode range, so no decoded code point can be
# mistaken for a function key.
FUNCTION_KEY_BASE = 0x110000


class Key:
    """Sentinel codes for keys that have no printable code point."""

    NONE = FUNCTION_KEY_BASE
    BACKSPACE = FUNCTION_KEY_BASE + 1
    DELETE = FUNCTION_KEY_BASE + 2
    UP = FUNCTION_KEY_BASE + 3
    DOWN = FUNCTION_KEY_BASE + 4
    LEFT = FUNCTION_KEY_BASE + 5
    RIGHT = FUNCTION_KEY_BASE + 6
    HOME = FUNCTION_KEY_BASE + 7
    END = FUNCTION_KEY_BASE + 8
    PAGE_UP = FUNCTION_KEY_BASE + 9
    PAGE_DOWN = FUNCTION_KEY_BASE + 10
    ESCAPE = FUNCTION_KEY_BASE + 11
    ENTER = FUNCTION_KEY_BASE + 12


# Editor chords. They are plain control code points, matched by the editor's
# dispatcher rather than by the decoder.
CHORD_SAVE = ctrl("s")
CHORD_QUIT = ctrl("q")
CHORD_REFRESH = ctrl("l")

# Final byte of a three-byte ``ESC [ X`` / ``ESC O X`` sequence.
ESCAPE_FINAL_BYTES: dict[int, KeyCode] = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

# Numeric parameter of a four-byte ``ESC [ N ~`` sequence. Terminal
# emulators disagree on Home/End, hence the duplicates.
ESCAPE_TILDE_PARAMS: dict[int, KeyCode] = {
    ord("1"): Key.HOME,
    ord("3"): Key.DELETE,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

SINGLE_BYTE_KEYS: dict[int, KeyCode] = {
    ctrl("h"): Key.BACKSPACE,
    BACKSPACE_BYTE: Key.BACKSPACE,
    ctrl("d"): Key.DELETE,
    ESC: Key.ESCAPE,
    ord("\r"): Key.ENTER,
    ord("\n"): Key.ENTER,
}

_KEY_NAMES: dict[KeyCode, str] = {
    value: name.lower()
    for name, value in vars(Key).items()
    if not name.startswith("_")
}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def is_escape_sequence(data: bytes) -> bool:
    """Return True if *data* starts a CSI or SS3 escape sequence.

    A lone ESC byte is the Escape key, not an escape sequence.
    """
    return len(data) > 1 and data[0] == ESC and data[1] in (ord("["), ord("O"))


def is_function_key(code: KeyCode) -> bool:
    """Return True if *code* is one of the ``Key`` sentinels."""
    return code >= FUNCTION_KEY_BASE


def decode_key(data: bytes) -> KeyCode:
    """Decode one raw keypress into a code point or ``Key`` sentinel.

    Never raises: bytes that are not valid UTF-8 decode to U+FFFD.
    """
    if not data:
        return Key.NONE

    if is_escape_sequence(data):
        code = _decode_escape_sequence(data)
        if code is not None:
            return code

    code = SINGLE_BYTE_KEYS.get(data[0])
    if code is not None:
        return code

    return _decode_first_rune(data)


def _decode_escape_sequence(data: bytes) -> KeyCode | None:
    if len(data) == 3:
        return ESCAPE_FINAL_BYTES.get(data[2])
    if len(data) == 4 and data[3] == ord("~"):
        return ESCAPE_TILDE_PARAMS.get(data[2])
    return None


def _decode_first_rune(data: bytes) -> KeyCode:
    lead = data[0]
    if lead < 0x80:
        size = 1
    elif 0xC0 <= lead < 0xE0:
        size = 2
    elif 0xE0 <= lead < 0xF0:
        size = 3
    elif 0xF0 <= lead < 0xF8:
        size = 4
    else:
        return REPLACEMENT_CHAR
    try:
        return ord(data[:size].decode("utf-8"))
    except UnicodeDecodeError:
        # Truncated or malformed sequence.
        return REPLACEMENT_CHAR


def key_name(code: KeyCode) -> str:
    """Return a readable name for *code*, for log output."""
    name = _KEY_NAMES.get(code)
    if name is not None:
        return name
    if 1 <= code <= 26:
        return "ctrl+" + chr(code + ord("a") - 1)
    if code < 0x20:
        return f"0x{code:02x}"
    return repr(chr(code))
