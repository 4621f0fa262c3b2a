#!/usr/bin/env python3
# sshd_shell/interface/__init__.py
from __future__ import annotations

"""
Package for command invocation and interactive sessions.

Provides:
- Invocation with safe error rendering (invoke / report_error).
- Line resolution, dispatch and help formatting.
- Completion helpers.
- Session frontends (StreamCLI / PromptToolkitCLI) and the session loop.
- Handler loader for the plugins package.
"""


# Invoker FIRST (handler depends on it)
from .invoker import ERROR_HEADER, GENERIC_ERROR_HINT, invoke, report_error, verbose_errors_enabled

# Dispatch / help
from .handler import (
    BUILT_IN_COMMANDS,
    HELP_TEXT,
    format_group_help,
    format_help,
    handle_line,
    resolve_line,
)

# Completion
from .completion import split_current_token, suggest

# Frontends and session loop
from .cli import BaseCLI, PromptToolkitCLI, StreamCLI, make_cli, HISTORY_FILE_PATH
from .session import ShellSession

# Loader
from .loader import filter_handlers, import_plugin_modules, load_handlers

__all__ = [
    # invoker
    "ERROR_HEADER",
    "GENERIC_ERROR_HINT",
    "invoke",
    "report_error",
    "verbose_errors_enabled",
    # handler
    "BUILT_IN_COMMANDS",
    "HELP_TEXT",
    "format_group_help",
    "format_help",
    "handle_line",
    "resolve_line",
    # completion
    "split_current_token",
    "suggest",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "StreamCLI",
    "make_cli",
    "HISTORY_FILE_PATH",
    "ShellSession",
    # loader
    "filter_handlers",
    "import_plugin_modules",
    "load_handlers",
]
