"""Configuration for the editor process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from gila import __version__

DEFAULT_NAME = "Gila editor"
DEFAULT_LOG_FILE = "editor.log"
DEFAULT_LOG_LEVEL = "info"
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class Config:
    """Editor configuration.

    ``width`` and ``height`` are the full screen size; the editor and
    renderer reserve the bottom two rows for their bars.
    """

    name: str = DEFAULT_NAME
    version: str = __version__
    width: int = 80
    height: int = 24
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    # When set, every flushed write is also appended to this file.
    write_log: str = ""


def load_config(environ: Mapping[str, str] = os.environ) -> Config:
    """Build a ``Config`` from ``GILA_*`` environment variables."""
    config = Config()
    if environ.get("GILA_LOG_FILE"):
        config.log_file = environ["GILA_LOG_FILE"]
    level = environ.get("GILA_LOG_LEVEL", "").lower()
    if level in LOG_LEVELS:
        config.log_level = level
    config.write_log = environ.get("GILA_WRITE_LOG", "")
    return config
