"""gila: a small terminal text editor."""

__version__ = "0.1.0"

# Configuration
from gila.config import Config, load_config

# Cursor and viewport
from gila.cursor import Cursor

# Editor loop
from gila.editor import Editor

# Frame snapshots
from gila.frame import Frame

# Keyboard input decoding
from gila.keys import (
    CHORD_QUIT,
    CHORD_REFRESH,
    CHORD_SAVE,
    MAX_KEY_BYTES,
    Key,
    KeyCode,
    ctrl,
    decode_key,
)

# Lines of text
from gila.line import TAB_STOP, Line, expand_tabs

# Frame composition
from gila.renderer import Renderer

# Terminal interface and implementations
from gila.terminal import (
    BufferedTerminalWriter,
    FileKeyReader,
    KeyReader,
    ProcessTerminal,
    TerminalWriter,
)

# Utilities
from gila.utils import center, truncate_to_width, visible_width

__all__ = [
    "__version__",
    # Configuration
    "Config",
    "load_config",
    # Cursor
    "Cursor",
    # Editor
    "Editor",
    # Frame
    "Frame",
    # Keys
    "CHORD_QUIT",
    "CHORD_REFRESH",
    "CHORD_SAVE",
    "MAX_KEY_BYTES",
    "Key",
    "KeyCode",
    "ctrl",
    "decode_key",
    # Lines
    "TAB_STOP",
    "Line",
    "expand_tabs",
    # Renderer
    "Renderer",
    # Terminal
    "BufferedTerminalWriter",
    "FileKeyReader",
    "KeyReader",
    "ProcessTerminal",
    "TerminalWriter",
    # Utilities
    "center",
    "truncate_to_width",
    "visible_width",
]
