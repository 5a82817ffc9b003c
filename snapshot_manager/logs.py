import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _is_ansi_color_supported(handle: TextIO) -> bool:
    if os.environ.get("TERM") == "ANSI":
        return True
    return hasattr(handle, "isatty") and handle.isatty()


class _LevelColorFormatter(logging.Formatter):
    _colors = {
        logging.DEBUG: "\x1b[38;5;240m",
        logging.INFO: "\x1b[38;5;240m",
        logging.WARNING: "\x1b[33;20m",
        logging.ERROR: "\x1b[31;20m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    _reset = "\x1b[0m"

    def __init__(self, colored: bool) -> None:
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)
        self._colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self._colors.get(record.levelno)
        if not self._colored or color is None:
            return message
        return color + message + self._reset


def setup_logging(level: int | str = logging.INFO) -> logging.Handler:
    logger = logging.getLogger()
    logger.setLevel(level)

    # Replace a handler from an earlier call instead of stacking a second one.
    for handler in list(logger.handlers):
        if getattr(handler, "_snapshot_manager", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_LevelColorFormatter(_is_ansi_color_supported(sys.stderr)))
    handler._snapshot_manager = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler
