#!/usr/bin/env python3
# sshd_shell/interface/handler.py
from __future__ import annotations

"""
Session line dispatch and help formatting.

A line is split into at most three parts: group, subcommand, argument.
  test run bob   -> "run" in group "test" with argument "bob"
  test bob       -> default command of "test" with argument "bob"
  test           -> default command of "test" with argument ""

Built-ins: help, help <group>, exit, quit.
"""

import difflib
from typing import Optional

from sshd_shell.commands import (
    EXECUTE,
    CommandDescriptor,
    CommandRegistry,
    SessionInterrupted,
    UnknownCommandError,
)
from sshd_shell.interface.invoker import invoke
from sshd_shell.ui import format_table

# Hint shown by the session banner and in unknown command errors
HELP_TEXT = "Enter 'help' for a list of supported commands"

BUILT_IN_COMMANDS: tuple[str, ...] = ("help", "exit", "quit")

# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_line(registry: CommandRegistry, line: str) -> Optional[tuple[CommandDescriptor, str]]:
    """
    Map a raw line to (descriptor, argument).

    Returns None for a blank line. Raises UnknownCommandError when the group
    is unknown or only its empty default slot would match.
    """
    text = line.strip()
    parts = text.split(None, 2)
    if not parts:
        return None

    group = parts[0]
    if len(parts) >= 2 and parts[1] != EXECUTE:
        descriptor = registry.lookup(group, parts[1])
        if descriptor is not None and descriptor.callback is not None:
            return descriptor, parts[2] if len(parts) == 3 else ""

    default = registry.lookup(group, EXECUTE)
    if default is None or default.callback is None:
        raise UnknownCommandError(group, parts[1] if len(parts) >= 2 else None)
    return default, text[len(group):].strip()


def _suggest_similar_names(registry: CommandRegistry, error: UnknownCommandError) -> str:
    """Return a short suggestion string for misspelled commands."""
    if error.group in registry and error.name:
        universe = registry.subcommands(error.group)
        word = error.name
        prefix = f"{error.group} "
    else:
        universe = registry.groups() + list(BUILT_IN_COMMANDS)
        word = error.group
        prefix = ""
    matches = difflib.get_close_matches(word, universe, n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(prefix + m for m in matches)}?" if matches else ""

# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------


def format_help(registry: CommandRegistry, *, newline: str = "\r\n") -> str:
    """Render the groups overview table."""
    if not registry:
        return "No commands loaded."

    rows = []
    for group in registry.groups():
        default = registry.lookup(group)
        rows.append([
            group,
            ", ".join(registry.subcommands(group)) or "-",
            default.description if default is not None else "",
        ])
    table = format_table(rows, headers=["Command", "Subcommands", "Description"], newline=newline)
    return f"{table}{newline}Type 'help <command>' for details on its subcommands."


def format_group_help(registry: CommandRegistry, group: str, *, newline: str = "\r\n") -> str:
    """Render the commands table for one group."""
    if group not in registry:
        return f"No such command: {group}"

    rows = []
    default = registry.lookup(group)
    if default is not None and default.callback is not None:
        rows.append([group, default.description or "(default)"])
    for name in registry.subcommands(group):
        descriptor = registry[group][name]
        rows.append([f"{group} {name}", descriptor.description])
    if not rows:
        return f"{group} has no runnable commands."
    return format_table(rows, headers=["Usage", "Description"], newline=newline)

# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def handle_line(
    registry: CommandRegistry,
    input_line: str,
    *,
    verbose: Optional[bool] = None,
    newline: str = "\r\n",
) -> Optional[str]:
    """
    Execute one session line.

    Returns:
        - None if nothing should be printed.
        - A printable string otherwise (command output, help or error text).

    Raises SessionInterrupted for exit/quit or when the command requests it.
    """
    line = input_line.strip()
    if not line:
        return None

    lowered = line.lower()
    if lowered in {"exit", "quit"}:
        raise SessionInterrupted()

    if lowered == "help":
        return format_help(registry, newline=newline)

    if lowered.startswith("help "):
        _, _, target = line.partition(" ")
        return format_group_help(registry, target.strip(), newline=newline)

    try:
        resolved = resolve_line(registry, line)
    except UnknownCommandError as exc:
        return f"{exc}.{_suggest_similar_names(registry, exc)} {HELP_TEXT}"
    if resolved is None:
        return None

    descriptor, argument = resolved
    return invoke(descriptor, argument, verbose=verbose, newline=newline)
