#!/usr/bin/env python3
# sshd_shell/commands/faults.py
from __future__ import annotations

"""
Error taxonomy for command registration and invocation.

- CommandConfigurationError: bad metadata found while building the registry.
- UnknownCommandError: a lookup miss reached a place that needs a command.
- SessionInterrupted: control signal meaning "end this session now".
"""


class CommandConfigurationError(Exception):
    """Raised at build time when handler metadata is missing or malformed."""


class UnknownCommandError(LookupError):
    """Raised when a command cannot be resolved or has no callback."""

    def __init__(self, group: str, name: str | None = None) -> None:
        self.group = group
        self.name = name
        target = group if not name else f"{group} {name}"
        super().__init__(f"Unknown command '{target}'")


class SessionInterrupted(BaseException):
    """
    Termination signal for the current session.

    Derives from BaseException so `except Exception` blocks in handler code
    never turn it into ordinary error output.
    """
