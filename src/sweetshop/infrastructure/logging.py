"""Logging setup shared by the CLI and the HTTP server."""

from __future__ import annotations

import logging
import sys


class ConsoleFormatter(logging.Formatter):
    """Compact ``[time] LEVEL logger: message`` lines, coloured on a TTY."""

    _COLOURS = {
        logging.DEBUG: "\033[0;36m",
        logging.WARNING: "\033[0;33m",
        logging.ERROR: "\033[0;31m",
        logging.CRITICAL: "\033[1;31m",
    }
    _RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        line = f"[{self.formatTime(record, '%H:%M:%S')}] {record.levelname} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        colour = self._COLOURS.get(record.levelno)
        if colour and sys.stderr.isatty():
            return f"{colour}{line}{self._RESET}"
        return line


def setup_logging(debug: bool = False, level: str = "INFO") -> None:
    """Install a single console handler on the root logger.

    Args:
        debug: Force DEBUG level regardless of *level*.
        level: Level name used when *debug* is off.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else level)

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    # SQL echo is never useful at our DEBUG level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
