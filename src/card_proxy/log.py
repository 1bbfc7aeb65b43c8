"""Logging setup for the command line tool."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "card_proxy"


def setup_logging(
    console: Console,
    error_log: Optional[Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Route package logs to the rich console, and errors to `error_log`.

    Calling it again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(RichHandler(console=console, show_time=False, show_path=False))

    if error_log is not None:
        # delay: the file is only created once an error is logged
        file_handler = logging.FileHandler(error_log, mode="w", encoding="utf-8", delay=True)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
