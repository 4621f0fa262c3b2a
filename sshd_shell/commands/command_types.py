#!/usr/bin/env python3
# sshd_shell/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- CommandCallback: the callable protocol for any bound command.
- CommandMeta: the metadata attached to handler classes and methods.
- CommandDescriptor: one registered (group, name) pair and its callback.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

# Internal key for a group's default command. Never typed by users.
EXECUTE = "execute"

# Attribute under which @shell_command stores its metadata.
META_ATTRIBUTE = "__shell_command__"


class CommandCallback(Protocol):
    """Protocol for a bound command: one string in, display text out."""

    def __call__(self, argument: str) -> str:  # pragma: no cover - signature only
        ...


@dataclass(frozen=True, slots=True)
class CommandMeta:
    """
    Declared metadata for a handler class (group) or method (subcommand).

    Attributes:
        value: Group name on a class, subcommand name on a method.
        description: Short, user-facing description for help output.
    """
    value: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """
    Immutable record for one invocable unit.

    `callback` is None for a group without a default command; the session
    layer must treat such a descriptor as an unknown command.
    """

    group: str
    name: str
    callback: Optional[CommandCallback]
    description: str = ""

    @property
    def is_default(self) -> bool:
        return self.name == EXECUTE

    @property
    def is_callable(self) -> bool:
        return self.callback is not None
