"""The editor loop: reads keys, edits the buffer, and renders frames.

``Editor`` owns the cursor, the list of lines and the save/quit state.
Input arrives through a ``KeyReader`` and output leaves through a
``FrameRenderer``; both are injected so the loop can be driven by scripted
input in tests.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, Literal, Protocol

from gila.config import Config
from gila.cursor import Cursor
from gila.frame import Frame
from gila.keys import (
    CHORD_QUIT,
    CHORD_REFRESH,
    CHORD_SAVE,
    Key,
    KeyCode,
    decode_key,
    is_function_key,
    key_name,
)
from gila.line import Line
from gila.renderer import content_height
from gila.terminal import KeyReader

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "[Untitled]"
# Consecutive quit chords needed to abandon unsaved changes.
QUIT_TIMES = 2
SAVE_PROMPT = "Save as: {} (ESC to cancel)"

EditorState = Literal["running", "awaiting_force_quit", "prompting", "terminated"]

NAVIGATION_KEYS = frozenset(
    {
        Key.HOME,
        Key.END,
        Key.LEFT,
        Key.RIGHT,
        Key.UP,
        Key.DOWN,
        Key.PAGE_UP,
        Key.PAGE_DOWN,
    }
)


class FrameRenderer(Protocol):
    def render(self, frame: Frame) -> None: ...

    def clear(self) -> None: ...


class Editor:
    """A single-document text editor.

    The document is a list of ``Line`` objects. The cursor may sit on the
    line just past the last one, so the user can type into an empty
    trailing line; that line only becomes a ``Line`` once something is
    typed into it.
    """

    def __init__(
        self,
        reader: KeyReader,
        renderer: FrameRenderer,
        config: Config,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.width = config.width
        self.height = content_height(config.height)
        self.cursor = Cursor()
        self.lines: list[Line] = []
        self.path: str | None = None
        self.prompt = Line()
        self.status_msg = ""
        self.last_status_time = 0.0
        self.quit_count = 0
        self.dirty = False
        self.state: EditorState = "running"
        self._r = reader
        self._renderer = renderer
        self._clock = clock

    # -- properties -----------------------------------------------------------

    @property
    def filename(self) -> str:
        if self.path is None:
            return DEFAULT_FILENAME
        return os.path.basename(self.path)

    @property
    def n_lines(self) -> int:
        return len(self.lines)

    # -- lifecycle --------------------------------------------------------------

    def run(self, path: str | None = None) -> None:
        """Open *path*, if given, then edit until the user quits.

        Read and write errors propagate. The screen is cleared on the way
        out either way.
        """
        if path:
            self.open(path)

        try:
            while self.state != "terminated":
                self.render()
                self.process_keypress()
        finally:
            self._renderer.clear()
        logger.info("Editor exited")

    def open(self, path: str) -> None:
        """Load *path* into the buffer, one ``Line`` per line of text.

        Bytes that are not valid UTF-8 are read as U+FFFD and reported in the
        message bar.
        """
        replaced = False
        try:
            lines = _read_lines(path, "strict")
        except UnicodeDecodeError:
            logger.warning("%s is not valid UTF-8; invalid bytes replaced", path)
            lines = _read_lines(path, "replace")
            replaced = True

        self.lines = lines
        self.path = path
        self.cursor = Cursor()
        self.dirty = False
        if replaced:
            self.set_status("Invalid UTF-8 replaced with U+FFFD; saving keeps the replacements")
        logger.info("Opened %s (%d lines)", path, len(lines))

    def render(self) -> None:
        self.cursor.scroll(self.width, self.height)
        self._renderer.render(self.frame())

    def frame(self) -> Frame:
        return Frame(
            cursor=self.cursor.copy(),
            lines=tuple(Line.from_runes(line.runes()) for line in self.lines),
            filename=self.filename,
            status_msg=self.status_msg,
            last_status_time=self.last_status_time,
            dirty=self.dirty,
        )

    def set_status(self, msg: str) -> None:
        self.status_msg = msg
        self.last_status_time = self._clock()

    def text(self) -> str:
        """The document as saved: every line followed by a newline."""
        return "".join(line.text() + "\n" for line in self.lines)

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyCode:
        raw = self._r.read_key()
        key = decode_key(raw)
        logger.debug("Read raw key %r as %s", raw, key_name(key))
        return key

    def process_keypress(self) -> None:
        """Read one key and act on it."""
        self.handle_key(self.read_key())

    def handle_key(self, key: KeyCode) -> None:
        if key == Key.NONE:
            logger.info("End of input")
            self.state = "terminated"
            return

        if key != CHORD_QUIT:
            self.quit_count = 0
            if self.state == "awaiting_force_quit":
                self.state = "running"

        if key == CHORD_SAVE:
            self.save()
        elif key == CHORD_QUIT:
            self.quit()
        elif key in NAVIGATION_KEYS:
            self.move_cursor(key)
        elif key == Key.BACKSPACE:
            self.backspace()
        elif key == Key.DELETE:
            self.delete()
        elif key == Key.ENTER:
            self.insert_newline()
        elif key in (Key.ESCAPE, CHORD_REFRESH):
            pass
        else:
            self.insert_rune(chr(key))

    # -- commands -------------------------------------------------------------

    def quit(self) -> None:
        if not self.dirty:
            self.state = "terminated"
            return

        self.quit_count += 1
        if self.quit_count >= QUIT_TIMES:
            logger.info("Quit with unsaved changes")
            self.state = "terminated"
            return

        self.state = "awaiting_force_quit"
        remaining = QUIT_TIMES - self.quit_count
        self.set_status(
            f"File has unsaved changes. Press Ctrl-Q {remaining} more "
            f"time{'s' if remaining > 1 else ''} to quit."
        )

    def save(self) -> None:
        """Write the buffer to its file, prompting for a name if untitled.

        Failure to write is reported in the message bar and is not fatal.
        """
        if not self.dirty:
            return

        path = self.path
        if path is None:
            path = self.prompt_input(SAVE_PROMPT)
            if path is None:
                return

        text = self.text()
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            logger.exception("Failed to save %s", path)
            self.set_status(f"Can't save! I/O error: {e.strerror or e}")
            return

        # A prompted name sticks only once something was written to it.
        self.path = path
        self.dirty = False
        n_bytes = len(text.encode("utf-8"))
        logger.info("Saved %d bytes to %s", n_bytes, path)
        self.set_status(f"{n_bytes} bytes written to disk")

    def prompt_input(self, template: str) -> str | None:
        """Collect a line of input in the message bar.

        *template* is formatted with the text typed so far. Returns the
        text on Enter, or None if the user pressed Escape or input ended.
        """
        self.state = "prompting"
        self.prompt.clear()
        try:
            while True:
                self.set_status(template.format(self.prompt.text()))
                self.render()
                key = self.read_key()
                if key == Key.NONE:
                    self.state = "terminated"
                    return None
                if key == Key.ENTER:
                    if len(self.prompt):
                        self.set_status("")
                        return self.prompt.text()
                elif key == Key.ESCAPE:
                    self.prompt.clear()
                    self.set_status("Save aborted")
                    return None
                elif key in (Key.BACKSPACE, Key.DELETE):
                    self.prompt.delete_last()
                elif not is_function_key(key) and chr(key).isprintable():
                    self.prompt.insert_at(chr(key), len(self.prompt))
        finally:
            if self.state == "prompting":
                self.state = "running"

    # -- cursor movement ----------------------------------------------------

    def move_cursor(self, key: KeyCode) -> None:
        c = self.cursor
        cur_len = self._line_len(c.line)
        if key == Key.HOME:
            c.home()
        elif key == Key.END:
            c.end(cur_len)
        elif key == Key.LEFT:
            c.left(self._line_len(c.line - 1))
        elif key == Key.RIGHT:
            c.right(cur_len, self.n_lines)
        elif key == Key.UP:
            c.up()
        elif key == Key.DOWN:
            c.down(self.n_lines)
        elif key == Key.PAGE_UP:
            c.page_up(self.height)
        elif key == Key.PAGE_DOWN:
            c.page_down(self.height, self.n_lines)
        else:
            raise ValueError(f"unrecognized cursor key {key_name(key)}")

        c.snap(self._line_len(c.line))

    # -- edits --------------------------------------------------------------

    def insert_rune(self, rune: str) -> None:
        c = self.cursor
        if self.current_line() is None:
            self.lines.append(Line())
        self.lines[c.line - 1].insert_at(rune, c.col - 1)
        c.col += 1
        self.dirty = True

    def insert_newline(self) -> None:
        """Split the current line at the cursor."""
        c = self.cursor
        line = self.current_line()
        if line is None:
            self.lines.append(Line())
        else:
            self.lines.insert(c.line, line.split_at(c.col - 1))
        c.line += 1
        c.home()
        self.dirty = True

    def backspace(self) -> None:
        """Delete the rune left of the cursor, joining lines at column 1."""
        c = self.cursor
        if c.col > 1:
            line = self.current_line()
            if line is None:
                return
            line.delete_at(c.col - 2)
            c.col -= 1
            self.dirty = True
            return

        if c.line == 1:
            return
        prev = self.lines[c.line - 2]
        join_col = len(prev) + 1
        if self.current_line() is not None:
            prev.append(self.lines.pop(c.line - 1))
            self.dirty = True
        c.line -= 1
        c.col = join_col

    def delete(self) -> None:
        """Delete the rune under the cursor, joining lines at end of line."""
        c = self.cursor
        line = self.current_line()
        if line is None:
            return

        if c.col <= len(line):
            line.delete_at(c.col - 1)
            self.dirty = True
        elif c.line < self.n_lines:
            line.append(self.lines.pop(c.line))
            self.dirty = True

    # -- helpers ------------------------------------------------------------

    def current_line(self) -> Line | None:
        """The Line under the cursor, or None on the trailing virtual line."""
        if self.cursor.line > self.n_lines:
            return None
        return self.lines[self.cursor.line - 1]

    def _line_len(self, line_no: int) -> int:
        if 1 <= line_no <= self.n_lines:
            return len(self.lines[line_no - 1])
        return 0


def _read_lines(path: str, errors: str) -> list[Line]:
    lines: list[Line] = []
    with open(path, encoding="utf-8", errors=errors) as f:
        for raw in f:
            lines.append(Line(raw.removesuffix("\n")))
    return lines
