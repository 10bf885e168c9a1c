"""Terminal abstraction for raw-mode key input and buffered ANSI output.

Provides the two narrow capabilities the editor depends on, a
``KeyReader`` and a ``TerminalWriter``, plus concrete implementations over
file descriptors and binary streams, and a ``ProcessTerminal`` that puts the
controlling terminal into raw mode and restores it afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from typing import BinaryIO, Protocol

from gila.keys import MAX_KEY_BYTES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

ESC_CURSOR_HIDE = "\x1b[?25l"
ESC_CURSOR_SHOW = "\x1b[?25h"
ESC_CURSOR_POSITION = "\x1b[{};{}H"
ESC_CURSOR_TOP_LEFT = "\x1b[H"
ESC_INVERT_COLORS = "\x1b[7m"
ESC_RESTORE_RENDITION = "\x1b[m"
ESC_LINE_CLEAR_FROM_CURSOR = "\x1b[K"
ESC_SCREEN_CLEAR = "\x1b[2J"

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class KeyReader(Protocol):
    """Reads the raw bytes of a single keypress or chord."""

    def read_key(self) -> bytes: ...


class TerminalWriter(Protocol):
    """Buffered output to a terminal-like device.

    Nothing reaches the device until ``flush`` is called.
    """

    def write_byte(self, b: int) -> None: ...

    def write_rune(self, r: str) -> None: ...

    def write_string(self, s: str) -> None: ...

    def write_escape_sequence(self, seq: str, *args: object) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


class FileKeyReader:
    """Reads keypresses from a file descriptor.

    When *fd* is a terminal in raw mode, ``read_key`` blocks until at least
    one byte is available and returns everything the terminal sent for one
    key, up to *max_key_bytes*. An empty result means end of input.
    """

    def __init__(self, fd: int, max_key_bytes: int = MAX_KEY_BYTES) -> None:
        self._fd = fd
        self._max_key_bytes = max_key_bytes

    def read_key(self) -> bytes:
        return os.read(self._fd, self._max_key_bytes)


class BufferedTerminalWriter:
    """Accumulates output in memory and writes it in one go on ``flush``.

    Errors raised by the underlying stream propagate to the caller.
    """

    def __init__(self, stream: BinaryIO, write_log_path: str = "") -> None:
        self._stream = stream
        self._buf = bytearray()
        self._write_log_path = write_log_path

    @property
    def buffered(self) -> int:
        """Number of bytes waiting for the next flush."""
        return len(self._buf)

    def write_byte(self, b: int) -> None:
        self._buf.append(b)

    def write_rune(self, r: str) -> None:
        self._buf += r.encode("utf-8")

    def write_string(self, s: str) -> None:
        self._buf += s.encode("utf-8")

    def write_escape_sequence(self, seq: str, *args: object) -> None:
        self.write_string(seq.format(*args) if args else seq)

    def flush(self) -> None:
        data = bytes(self._buf)
        self._buf.clear()
        self._stream.write(data)
        self._stream.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "ab") as f:
                    f.write(data)
            except OSError:
                logger.warning("Could not append to write log %s", self._write_log_path)


class ProcessTerminal:
    """The process's controlling terminal, backed by stdin and stdout.

    ``start`` saves the current termios attributes and switches stdin to raw
    mode; ``stop`` restores them. Also usable as a context manager.
    """

    def __init__(self, write_log_path: str = "") -> None:
        self._in_fd = sys.stdin.fileno()
        self._out_fd = sys.stdout.fileno()
        self._original_termios: list | None = None
        self.key_reader = FileKeyReader(self._in_fd)
        self.writer = BufferedTerminalWriter(sys.stdout.buffer, write_log_path)

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._out_fd).columns
        except (ValueError, OSError):
            return DEFAULT_COLUMNS

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._out_fd).lines
        except (ValueError, OSError):
            return DEFAULT_ROWS

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode on stdin."""
        self._original_termios = termios.tcgetattr(self._in_fd)
        if is_raw_mode(self._in_fd):
            logger.debug("fd %d was already in raw mode", self._in_fd)
        tty.setraw(self._in_fd)
        logger.debug("Raw mode enabled on fd %d", self._in_fd)

    def stop(self) -> None:
        """Restore the terminal attributes saved by ``start``."""
        if self._original_termios is not None:
            termios.tcsetattr(self._in_fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
            logger.debug("Raw mode disabled on fd %d", self._in_fd)

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False


def is_raw_mode(fd: int) -> bool:
    """Heuristic check for whether the terminal fd is in raw mode.

    Raw mode is characterised by the absence of ICANON and ECHO in the
    local-mode flags.
    """
    try:
        attrs = termios.tcgetattr(fd)
        lflag = attrs[3]  # c_lflag
        return not bool(lflag & (termios.ICANON | termios.ECHO))
    except termios.error:
        return False
