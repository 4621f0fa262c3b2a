#!/usr/bin/env python3
# sshd_shell/commands/__init__.py
from __future__ import annotations

"""
Package for command metadata, discovery and the command registry.

Provides:
- Data structures (`CommandMeta`, `CommandDescriptor`, `EXECUTE`).
- Handler marking (`shell_command`, `CATALOG`).
- Discovery of handler metadata (`discover`, `resolve_handler_type`).
- Registry construction and lookup (`build_registry`, `CommandRegistry`).
- Faults (`CommandConfigurationError`, `UnknownCommandError`, `SessionInterrupted`).
"""


# Re-export from submodules
from .command_types import EXECUTE, CommandCallback, CommandDescriptor, CommandMeta
from .faults import CommandConfigurationError, SessionInterrupted, UnknownCommandError
from .commands import CATALOG, HandlerCatalog, get_command_meta, register_handler_type, shell_command
from .discovery import DiscoveredHandler, discover, discover_all, resolve_handler_type
from .registry import CommandRegistry, build_registry

__all__ = [
    "EXECUTE",
    "CommandCallback",
    "CommandDescriptor",
    "CommandMeta",
    "CommandConfigurationError",
    "SessionInterrupted",
    "UnknownCommandError",
    "CATALOG",
    "HandlerCatalog",
    "get_command_meta",
    "register_handler_type",
    "shell_command",
    "DiscoveredHandler",
    "discover",
    "discover_all",
    "resolve_handler_type",
    "CommandRegistry",
    "build_registry",
]
