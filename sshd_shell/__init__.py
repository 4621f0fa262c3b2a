#!/usr/bin/env python3
# sshd_shell/__init__.py
from __future__ import annotations
"""
Command registry and invocation pipeline for SSH-delivered shells.

Notes:
- Keep this module light; subpackages expose their APIs via their own
  __init__.py files.
"""

from sshd_shell.commands import (  # noqa: F401
    EXECUTE,
    CommandDescriptor,
    CommandRegistry,
    SessionInterrupted,
    build_registry,
    shell_command,
)
from sshd_shell.interface.invoker import invoke  # noqa: F401

__version__ = "0.1.0"
