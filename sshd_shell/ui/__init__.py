#!/usr/bin/env python3
# sshd_shell/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, colorize, strip_ansi, supports_color
from .console import PRINT_MUTEX, print_line
from .table import format_table
from .logging import ColorizingStreamHandler, PlainFormatter, init_logger

__all__ = [
    "ANSI",
    "colorize",
    "strip_ansi",
    "supports_color",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "init_logger",
]
