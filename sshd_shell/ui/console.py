#!/usr/bin/env python3
# sshd_shell/ui/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for operator console output (boot steps and logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()
