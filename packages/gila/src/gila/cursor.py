"""Cursor position and viewport scroll offsets.

The cursor's ``col`` and ``line`` are 1-indexed positions in the document.
``col_offset`` and ``line_offset`` are 0-indexed and describe how far the
viewport has scrolled when the document is too wide or too long for the
screen. The cursor never holds a reference to the text; callers pass in the
line lengths and line count each transition needs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# Columns of left-hand context kept visible when scrolling back left.
MARGIN_WIDTH = 3


@dataclass
class Cursor:
    col: int = 1
    line: int = 1
    col_offset: int = 0
    line_offset: int = 0

    # -- screen-relative coordinates ------------------------------------------

    @property
    def x(self) -> int:
        """1-indexed column of the cursor relative to the screen."""
        return self.col - self.col_offset

    @property
    def y(self) -> int:
        """1-indexed row of the cursor relative to the screen."""
        return self.line - self.line_offset

    def copy(self) -> Cursor:
        return replace(self)

    # -- horizontal movement ---------------------------------------------------

    def left(self, prev_line_len: int) -> None:
        if self.col > 1:
            self.col -= 1
            return
        if self.line > 1:
            self.line -= 1
            self.end(prev_line_len)

    def right(self, cur_line_len: int, n_lines: int) -> None:
        if self.col <= cur_line_len:
            self.col += 1
            return
        if self.line <= n_lines:
            self.line += 1
            self.home()

    def home(self) -> None:
        self.col = 1

    def end(self, line_len: int) -> None:
        self.col = line_len + 1

    def snap(self, cur_line_len: int) -> None:
        """Pull the cursor back to the end of a line shorter than its column."""
        if self.col > cur_line_len + 1:
            self.end(cur_line_len)

    # -- vertical movement -----------------------------------------------------

    def up(self) -> bool:
        if self.line <= 1:
            return False
        self.line -= 1
        return True

    def down(self, n_lines: int) -> bool:
        if self.line > n_lines:
            return False
        self.line += 1
        return True

    def page_up(self, height: int) -> None:
        self.line = max(1, self.line_offset - height + 2)

    def page_down(self, height: int, n_lines: int) -> None:
        bottom = self.line_offset + height - 1
        self.line = min(n_lines + 1, bottom + height)

    # -- viewport --------------------------------------------------------------

    def scroll(self, width: int, height: int) -> None:
        """Recompute the offsets so the cursor lies inside a width x height view."""
        line_idx, col_idx = self.line - 1, self.col - 1

        # Cursor above the viewport: make its line the top row.
        if line_idx < self.line_offset:
            self.line_offset = line_idx
        # Cursor below the viewport: make its line the bottom row.
        if line_idx >= self.line_offset + height:
            self.line_offset = line_idx - height + 1

        if col_idx < self.col_offset + MARGIN_WIDTH:
            self.col_offset = max(0, col_idx - MARGIN_WIDTH)
        if col_idx >= self.col_offset + width:
            self.col_offset = col_idx - width + 1
