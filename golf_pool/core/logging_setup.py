"""Logging setup shared by the API process and scripts."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import LOG_FILE, LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL, log_file: Optional[str] = LOG_FILE) -> None:
    """Configure the root logger with a console handler and an optional file handler."""

    root = logging.getLogger()
    # Clear any existing handlers to avoid duplicates on reload
    root.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)-7s] %(name)-32s : %(message)s",
            datefmt="%b %d %a %H:%M:%S",
        )
    )
    root.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8", mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)-8s %(filename)-24.24s%(lineno)-5d%(funcName)-28.28s: %(message)s",
                datefmt="%b %d %a] [%H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    root.setLevel(level)
    logging.getLogger(__name__).info("Logging configured at level %s", level)


__all__ = ["setup_logging"]
