#!/usr/bin/env python3
# sshd_shell/commands/commands.py
from __future__ import annotations

"""
Handler marking and collection.

This module provides:
- shell_command: decorator that marks a handler class (group) or one of its
  methods (subcommand) with CommandMeta.
- HandlerCatalog: in-memory list of marked handler classes, filled at import time.
- get_command_meta: read the metadata back from a class or function.
"""

from typing import Any, Callable, Optional, TypeVar

from sshd_shell.commands.command_types import CommandMeta, META_ATTRIBUTE

T = TypeVar("T")


class HandlerCatalog:
    """Holds handler classes marked with @shell_command, in declaration order."""

    def __init__(self) -> None:
        self._types: list[type] = []

    def add(self, handler_type: type) -> None:
        """Remember a handler class once."""
        if handler_type not in self._types:
            self._types.append(handler_type)

    def all(self) -> list[type]:
        return list(self._types)

    def clear(self) -> None:
        self._types.clear()

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, handler_type: object) -> bool:
        return handler_type in self._types


# Global catalog used by the plugin loader
CATALOG = HandlerCatalog()


def shell_command(
    value: str,
    *,
    description: Optional[str] = None,
) -> Callable[[T], T]:
    """
    Decorator attaching command metadata.

    On a class, `value` is the group name and the class is added to CATALOG.
    On a method, `value` is the subcommand name inside the class's group.
    The description defaults to the first docstring line.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("shell_command requires a non-empty name")

    def wrapper(target: T) -> T:
        doc = (getattr(target, "__doc__", None) or "").strip()
        meta = CommandMeta(
            value=value.strip(),
            description=(description if description is not None
                         else doc.splitlines()[0] if doc else "").strip(),
        )
        setattr(target, META_ATTRIBUTE, meta)
        if isinstance(target, type):
            CATALOG.add(target)
        return target

    return wrapper


def get_command_meta(target: Any) -> Optional[CommandMeta]:
    """Return the CommandMeta declared on a class or function, if any."""
    meta = getattr(target, META_ATTRIBUTE, None)
    return meta if isinstance(meta, CommandMeta) else None


def register_handler_type(handler_type: type) -> None:
    """Explicit API for classes marked without going through the decorator."""
    if get_command_meta(handler_type) is None:
        raise ValueError(
            f"{handler_type.__qualname__} carries no @shell_command metadata")
    CATALOG.add(handler_type)
