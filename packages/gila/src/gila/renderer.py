"""Frame composition: turns a ``Frame`` into terminal writes.

Each call to ``Renderer.render`` repaints the whole screen: the text area,
an inverted status bar and a message bar. Output is buffered by the
``TerminalWriter`` and flushed once, at the end of the frame.
"""

from __future__ import annotations

import time
from typing import Callable

from gila.cursor import Cursor
from gila.frame import Frame
from gila.line import Line
from gila.terminal import (
    ESC_CURSOR_HIDE,
    ESC_CURSOR_POSITION,
    ESC_CURSOR_SHOW,
    ESC_CURSOR_TOP_LEFT,
    ESC_INVERT_COLORS,
    ESC_LINE_CLEAR_FROM_CURSOR,
    ESC_RESTORE_RENDITION,
    ESC_SCREEN_CLEAR,
    TerminalWriter,
)
from gila.utils import center, truncate_to_width, visible_width

# Rows at the bottom of the screen taken by the status and message bars.
RESERVED_ROWS = 2
STATUS_MSG_MAX_DURATION = 5.0
FILENAME_MAX_LEN = 20
EMPTY_ROW_FILLER = "~"


def content_height(screen_height: int) -> int:
    """Number of text rows left once the bars are drawn."""
    return max(0, screen_height - RESERVED_ROWS)


class Renderer:
    """Writes frames to a ``TerminalWriter``.

    Parameters
    ----------
    name, version:
        Shown in the banner of an empty document.
    writer:
        Destination for all output.
    width, height:
        Screen dimensions, including the two bar rows.
    clock:
        Returns the current time in seconds; decides message expiry.
    """

    def __init__(
        self,
        name: str,
        version: str,
        writer: TerminalWriter,
        width: int,
        height: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.about = f"{name} -- version {version}"
        self._w = writer
        self.width = width
        self.height = content_height(height)
        self._clock = clock

    # -- public API ---------------------------------------------------------

    def render(self, frame: Frame) -> None:
        """Repaint the screen from *frame* and flush."""
        self._w.write_escape_sequence(ESC_CURSOR_HIDE)
        self._w.write_escape_sequence(ESC_CURSOR_TOP_LEFT)
        self._render_page(frame.cursor, frame.lines)
        self._render_status_bar(frame.filename, frame.cursor.line, frame.n_lines, frame.dirty)
        self._render_message_bar(frame.status_msg, frame.last_status_time)
        self._w.write_escape_sequence(ESC_CURSOR_POSITION, frame.cursor.y, frame.cursor.x)
        self._w.write_escape_sequence(ESC_CURSOR_SHOW)
        self._w.flush()

    def clear(self) -> None:
        """Wipe the screen and home the cursor."""
        self._w.write_escape_sequence(ESC_SCREEN_CLEAR)
        self._w.write_escape_sequence(ESC_CURSOR_TOP_LEFT)
        self._w.flush()

    # -- text area ----------------------------------------------------------

    def _render_page(self, cursor: Cursor, lines: tuple[Line, ...]) -> None:
        if not lines:
            self._render_homepage()
        else:
            self._render_content(cursor, lines)

    def _render_homepage(self) -> None:
        banner_row = self.height // 3
        for y in range(1, self.height + 1):
            if y == banner_row:
                self._w.write_string(truncate_to_width(center(self.about, self.width), self.width))
                self._render_new_line()
            else:
                self._render_empty_line()

    def _render_content(self, cursor: Cursor, lines: tuple[Line, ...]) -> None:
        for row in range(self.height):
            line_idx = row + cursor.line_offset
            # The virtual line after the last one has no Line object.
            if line_idx < len(lines):
                self._render_line(cursor, lines[line_idx])
            else:
                self._render_empty_line()

    def _render_line(self, cursor: Cursor, line: Line) -> None:
        start = min(cursor.col_offset, len(line))
        stop = start + min(len(line) - start, self.width)
        self._w.write_string(line.slice(start, stop))
        self._render_new_line()

    def _render_empty_line(self) -> None:
        self._w.write_string(EMPTY_ROW_FILLER)
        self._render_new_line()

    def _render_new_line(self) -> None:
        """Clear what is left of the previous frame's row, then CRLF."""
        self._w.write_escape_sequence(ESC_LINE_CLEAR_FROM_CURSOR)
        self._w.write_string("\r\n")

    # -- bars ---------------------------------------------------------------

    def _render_status_bar(self, filename: str, line: int, total_lines: int, dirty: bool) -> None:
        self._w.write_escape_sequence(ESC_INVERT_COLORS)

        lhs = f" {filename[:FILENAME_MAX_LEN]} - {total_lines} lines"
        if dirty:
            lhs += " (modified)"
        # Leave room for at least one padding column.
        lhs = truncate_to_width(lhs, self.width - 1)
        self._w.write_string(lhs)

        rhs = f"{line}/{total_lines} "
        remaining = self.width - visible_width(lhs)
        if remaining >= len(rhs):
            self._w.write_string(" " * (remaining - len(rhs)) + rhs)
        else:
            self._w.write_string(" " * remaining)

        self._w.write_escape_sequence(ESC_RESTORE_RENDITION)
        self._w.write_string("\r\n")

    def _render_message_bar(self, msg: str, last_status_time: float) -> None:
        if msg and self._clock() - last_status_time < STATUS_MSG_MAX_DURATION:
            self._w.write_string(truncate_to_width(msg, self.width))
        self._w.write_escape_sequence(ESC_LINE_CLEAR_FROM_CURSOR)
