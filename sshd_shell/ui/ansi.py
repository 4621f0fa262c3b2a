#!/usr/bin/env python3
# sshd_shell/ui/ansi.py
from __future__ import annotations

import os
import re
import sys
from typing import Optional, TextIO

# ---- Core SGR map -----------------------------------------------------------

ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    True when ANSI colors should be written to `stream` (default stderr).

    NO_COLOR disables colors; FORCE_COLOR enables them even when piped.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles from ANSI (e.g. 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
