#!/usr/bin/env python3
# sshd_shell/commands/registry.py
from __future__ import annotations

"""
Command table builder and the read-only command registry.

build_registry folds discovered handlers into a two-level table
(group -> command name -> CommandDescriptor):
  1) fetch or create the group's mapping,
  2) bind the default command under "execute"; a handler without one only
     fills an empty slot with a None callback,
  3) bind every marked subcommand, overwriting earlier entries.

The resulting CommandRegistry iterates both levels in sorted key order and
is never mutated after construction.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from sshd_shell.commands.command_types import EXECUTE, CommandDescriptor
from sshd_shell.commands.discovery import DiscoveredHandler, discover_all
from sshd_shell.commands.faults import CommandConfigurationError

logger = logging.getLogger(__name__)

CommandTable = Mapping[str, Mapping[str, CommandDescriptor]]


class CommandRegistry(Mapping[str, Mapping[str, CommandDescriptor]]):
    """Immutable group -> name -> descriptor lookup shared by all sessions."""

    def __init__(self, table: Mapping[str, Mapping[str, CommandDescriptor]]) -> None:
        self._groups: Mapping[str, Mapping[str, CommandDescriptor]] = MappingProxyType({
            group: MappingProxyType({name: table[group][name] for name in sorted(table[group])})
            for group in sorted(table)
        })

    # ---------------- Mapping protocol ----------------

    def __getitem__(self, group: str) -> Mapping[str, CommandDescriptor]:
        return self._groups[group]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        layout = {group: list(commands) for group, commands in self._groups.items()}
        return f"CommandRegistry({layout!r})"

    # ---------------- Lookup ----------------

    def lookup(self, group: str, name: str = EXECUTE) -> Optional[CommandDescriptor]:
        """Return the descriptor for (group, name), or None if not registered."""
        commands = self._groups.get(group)
        if commands is None:
            return None
        return commands.get(name)

    def groups(self) -> list[str]:
        """Sorted group names."""
        return list(self._groups)

    def commands(self, group: str) -> list[str]:
        """Sorted command names of a group (including "execute"); [] if unknown."""
        return list(self._groups.get(group, {}))

    def subcommands(self, group: str) -> list[str]:
        """Sorted user-typeable command names of a group."""
        return [name for name in self.commands(group) if name != EXECUTE]


def _bind(
    table: dict[str, dict[str, CommandDescriptor]],
    owners: dict[tuple[str, str], type],
    found: DiscoveredHandler,
    descriptor: CommandDescriptor,
    *,
    strict: bool,
) -> None:
    """Store a descriptor, reporting overwrites across handler classes."""
    commands = table[descriptor.group]
    key = (descriptor.group, descriptor.name)
    existing = commands.get(descriptor.name)
    previous_owner = owners.get(key)

    if (
        existing is not None
        and existing.callback is not None
        and previous_owner is not None
        and previous_owner is not found.handler_type
    ):
        message = (
            f"Command '{descriptor.group} {descriptor.name}' from "
            f"{found.handler_type.__qualname__} overrides the one from "
            f"{previous_owner.__qualname__}"
        )
        if strict:
            raise CommandConfigurationError(message)
        logger.warning(message)

    commands[descriptor.name] = descriptor
    owners[key] = found.handler_type


def _load_handler(
    table: dict[str, dict[str, CommandDescriptor]],
    owners: dict[tuple[str, str], type],
    found: DiscoveredHandler,
    *,
    strict: bool,
) -> None:
    group = found.group
    commands = table.setdefault(group, {})

    logger.debug("Loading default command for %s", found.handler_type.__qualname__)
    if found.default_method is not None:
        logger.debug("Adding default command method %s", found.default_method)
        _bind(table, owners, found, CommandDescriptor(
            group=group,
            name=EXECUTE,
            callback=getattr(found.handler, found.default_method),
            description=found.meta.description,
        ), strict=strict)
    # A handler without a default only fills an empty slot; overwriting would
    # null out a real default another handler of the group already bound.
    elif EXECUTE not in commands:
        logger.debug("%s does not declare a default command method '%s'",
                     found.handler_type.__qualname__, group)
        _bind(table, owners, found, CommandDescriptor(
            group=group,
            name=EXECUTE,
            callback=None,
            description=found.meta.description,
        ), strict=strict)

    for method_name, meta in found.subcommands:
        _bind(table, owners, found, CommandDescriptor(
            group=group,
            name=meta.value,
            callback=getattr(found.handler, method_name),
            description=meta.description,
        ), strict=strict)


def build_registry(handlers: Iterable[Any], *, strict: bool = False) -> CommandRegistry:
    """
    Build the registry from handler objects carrying @shell_command metadata.

    Every handler is discovered before anything is bound, so a malformed
    handler aborts the build with CommandConfigurationError and no partial
    registry exists. With `strict`, a command overriding one registered by a
    different handler class is also fatal; otherwise the last one wins.
    """
    discovered = discover_all(handlers)

    table: dict[str, dict[str, CommandDescriptor]] = {}
    owners: dict[tuple[str, str], type] = {}
    for found in discovered:
        _load_handler(table, owners, found, strict=strict)

    registry = CommandRegistry(table)
    logger.debug("Built command registry with %d group(s)", len(registry))
    return registry
