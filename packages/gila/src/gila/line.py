"""A single line of text held as a mutable sequence of code points."""

from __future__ import annotations

from typing import Iterable

TAB_STOP = 4


def expand_tabs(text: str, tab_stop: int = TAB_STOP) -> list[str]:
    """Return the runes of *text* with each tab padded to the next tab stop.

    Tabs are replaced by spaces so that the terminal's own tab stop setting
    never applies.
    """
    runes: list[str] = []
    for ch in text:
        if ch == "\t":
            runes.append(" ")
            while len(runes) % tab_stop:
                runes.append(" ")
        else:
            runes.append(ch)
    return runes


class Line:
    """One line of a document.

    Indices passed to the edit methods are clamped instead of raising, so an
    out-of-range insert appends and an out-of-range delete removes the last
    rune.
    """

    __slots__ = ("_runes",)

    def __init__(self, text: str = "") -> None:
        self._runes: list[str] = expand_tabs(text)

    @classmethod
    def from_runes(cls, runes: Iterable[str]) -> Line:
        line = cls()
        line._runes = list(runes)
        return line

    def __len__(self) -> int:
        return len(self._runes)

    def __repr__(self) -> str:
        return f"Line({self.text()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._runes == other._runes

    def length(self) -> int:
        return len(self._runes)

    def text(self) -> str:
        return "".join(self._runes)

    def runes(self) -> tuple[str, ...]:
        return tuple(self._runes)

    def slice(self, start: int, stop: int) -> str:
        """Return the text between rune indices *start* and *stop*."""
        return "".join(self._runes[start:stop])

    # -- edits ---------------------------------------------------------------

    def insert_at(self, rune: str, index: int) -> None:
        if index < 0 or index > len(self._runes):
            index = len(self._runes)
        self._runes.insert(index, rune)

    def delete_at(self, index: int) -> None:
        if not self._runes:
            return
        if index < 0 or index >= len(self._runes):
            index = len(self._runes) - 1
        del self._runes[index]

    def delete_last(self) -> None:
        if self._runes:
            self._runes.pop()

    def clear(self) -> None:
        self._runes.clear()

    def append(self, other: Line) -> None:
        """Move every rune of *other* onto the end of this line."""
        self._runes.extend(other._runes)
        other._runes = []

    def split_at(self, index: int) -> Line:
        """Cut the line at *index* and return the tail as a new Line."""
        index = max(0, min(index, len(self._runes)))
        tail = Line.from_runes(self._runes[index:])
        del self._runes[index:]
        return tail
