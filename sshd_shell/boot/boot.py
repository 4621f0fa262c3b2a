#!/usr/bin/env python3
# sshd_shell/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the shell.

Each step prints a Linux-style [  OK  ] / [FAILED] line. A failed step
re-raises, so no session is ever served from a partial registry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TextIO

from sshd_shell.commands import CommandRegistry, build_registry
from sshd_shell.config import ShellConfig, load_config
from sshd_shell.interface.loader import load_handlers
from sshd_shell.ui import colorize, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: ShellConfig
    logger: logging.Logger
    registry: CommandRegistry
    handler_count: int


def _step(label: str, fn: Callable[[], Any], *, file: Optional[TextIO] = None) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"), file=file
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"), file=file)
    return out


def boot_sequence(
    config: Optional[ShellConfig] = None,
    *,
    file: Optional[TextIO] = None,
) -> BootState:
    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, file=file)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "sshd_shell",
            level=config.log_level,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        file=file,
    )

    # ---------- handlers ----------
    handlers = _step(
        f"Load handlers from '{config.plugin_package}'",
        lambda: load_handlers(config.plugin_package),
        file=file,
    )

    # ---------- registry ----------
    registry = _step(
        "Build command registry",
        lambda: build_registry(handlers, strict=config.strict_commands),
        file=file,
    )
    logger.info("Loaded %d handler(s) into %d command group(s): %s",
                len(handlers), len(registry), ", ".join(registry.groups()) or "-")

    _step("Boot complete", lambda: None, file=file)
    return BootState(
        config=config,
        logger=logger,
        registry=registry,
        handler_count=len(handlers),
    )
