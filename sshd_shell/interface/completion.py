#!/usr/bin/env python3
# sshd_shell/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Token-aware suggestions for:
- First token: built-in commands and all group names.
- 'help <partial>': group names.
- Second token of a group: its subcommand names ("execute" is never offered).
Arguments are opaque strings, so nothing is suggested past the second token.
"""

from sshd_shell.commands import CommandRegistry
from sshd_shell.interface.handler import BUILT_IN_COMMANDS


def split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Trailing whitespace appends an empty token to signal a new one.
    """
    parts = raw_input.split()
    if raw_input and raw_input[-1].isspace():
        parts.append("")
    current_prefix = parts[-1] if parts else ""
    return parts, current_prefix


def suggest(registry: CommandRegistry, text_before_cursor: str) -> list[str]:
    """Produce sorted suggestions for the token under the cursor."""
    parts, current_prefix = split_current_token(text_before_cursor.lstrip())

    if len(parts) <= 1:
        universe = {*BUILT_IN_COMMANDS, *registry.groups()}
        return sorted(w for w in universe if w.startswith(current_prefix))

    if len(parts) > 2:
        return []

    first_token = parts[0]
    if first_token == "help":
        return [g for g in registry.groups() if g.startswith(current_prefix)]

    return [n for n in registry.subcommands(first_token) if n.startswith(current_prefix)]
