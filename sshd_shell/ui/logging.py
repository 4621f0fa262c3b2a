#!/usr/bin/env python3
# sshd_shell/ui/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

from sshd_shell.ui.ansi import ANSI, strip_ansi, supports_color
from sshd_shell.ui.console import PRINT_MUTEX


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler coloring each record by level when the stream is a TTY.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_color(self.stream)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            color = self._LEVEL_COLORS.get(record.levelno, "") if self._use_ansi else ""
            if color:
                message = f"{color}{message}{ANSI['reset']}"
            elif not self._use_ansi:
                message = strip_ansi(message)
            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _as_level(level: Union[int, str, None]) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def init_logger(
    name: str = "sshd_shell",
    level: Union[int, str, None] = logging.INFO,
    logfile: Optional[str] = None,
    *,
    stream=None,
) -> logging.Logger:
    """
    Initialize the operator-facing logger.

    Console: colored by level on a TTY, plain otherwise.
    File (optional): rotating, plain text, UTF-8, always at DEBUG.
    Calling it again updates the level without stacking handlers.
    """
    resolved = _as_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(resolved)
    logger.propagate = False

    console_handler = next(
        (h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if console_handler is None:
        console_handler = ColorizingStreamHandler(
            stream=stream if stream is not None else sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)
    console_handler.setLevel(resolved)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
