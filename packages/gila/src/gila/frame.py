"""Immutable snapshot of editor state handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass

from gila.cursor import Cursor
from gila.line import Line


@dataclass(frozen=True)
class Frame:
    """Everything one repaint needs.

    A frame is built fresh before every render. ``cursor`` and every entry
    of ``lines`` are copies, so edits made after the frame was built never
    show up in it.
    """

    cursor: Cursor
    lines: tuple[Line, ...]
    filename: str
    status_msg: str = ""
    last_status_time: float = 0.0
    dirty: bool = False

    @property
    def n_lines(self) -> int:
        return len(self.lines)
