"""Entry point for the gila command."""

from __future__ import annotations

import argparse
import logging
import sys
import termios

from gila import __version__
from gila.config import Config, load_config
from gila.editor import Editor
from gila.renderer import Renderer
from gila.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gila", description="gila: a small terminal text editor")
    parser.add_argument("path", nargs="?", default=None, help="File to open")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(config: Config) -> None:
    # The terminal belongs to the editor, so logs go to a file.
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run(path: str | None, config: Config) -> None:
    terminal = ProcessTerminal(write_log_path=config.write_log)
    config.width = terminal.columns
    config.height = terminal.rows
    logger.info("Starting %s %s on a %dx%d screen", config.name, config.version, config.width, config.height)

    renderer = Renderer(config.name, config.version, terminal.writer, config.width, config.height)
    editor = Editor(terminal.key_reader, renderer, config)
    with terminal:
        editor.run(path)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    setup_logging(config)

    try:
        run(args.path, config)
    except (OSError, termios.error) as e:
        logger.exception("Editor failed")
        print(f"gila: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
