#!/usr/bin/env python3
# sshd_shell/commands/discovery.py
from __future__ import annotations

"""
Command discovery.

Reads the @shell_command metadata of handler objects without calling any
handler method:
- resolve_handler_type: unwrap transparent proxies (`__wrapped__` chain)
  and subclass proxies, returning the class that declares the metadata.
- find_default_method: the method named after the group, if it accepts a
  single string.
- iter_subcommand_methods: declared methods marked as subcommands.

Only methods declared directly on the handler class are considered.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from sshd_shell.commands.command_types import META_ATTRIBUTE, CommandMeta
from sshd_shell.commands.commands import get_command_meta
from sshd_shell.commands.faults import CommandConfigurationError

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_STR_ANNOTATIONS = (inspect.Parameter.empty, str, "str")


@dataclass(frozen=True, slots=True)
class DiscoveredHandler:
    """
    Metadata found on one handler object.

    Attributes:
        handler: The object as handed over (possibly a proxy); methods are
            bound on it so wrappers keep intercepting calls.
        handler_type: The effective implementation class.
        meta: Group-level metadata.
        default_method: Name of the default method, or None.
        subcommands: (method name, metadata) in declaration order.
    """
    handler: Any
    handler_type: type
    meta: CommandMeta
    default_method: Optional[str]
    subcommands: tuple[tuple[str, CommandMeta], ...]

    @property
    def group(self) -> str:
        return self.meta.value


def resolve_handler_type(handler: Any) -> type:
    """
    Return the registration-bearing class of `handler`.

    Any `__wrapped__` proxy chain is unwrapped first. A proxy built by
    subclassing inherits the marker without declaring it, so the MRO is
    walked to the first class whose own namespace carries the metadata.
    """
    try:
        target = inspect.unwrap(handler)
    except ValueError as exc:
        raise CommandConfigurationError(
            f"Cannot unwrap handler {handler!r}: {exc}") from exc
    target_type = target if isinstance(target, type) else type(target)
    for klass in target_type.__mro__:
        if META_ATTRIBUTE in vars(klass):
            return klass
    return target_type


def _plain_function(member: Any) -> tuple[Any, bool]:
    """Return (function, takes_self) for a class attribute."""
    if isinstance(member, staticmethod):
        return member.__func__, False
    if isinstance(member, classmethod):
        return member.__func__, True
    return member, True


def accepts_single_string(func: Any, *, takes_self: bool = True) -> bool:
    """True if `func` can be called with exactly one string argument."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    parameters = list(signature.parameters.values())
    if takes_self:
        if not parameters or parameters[0].kind not in _POSITIONAL:
            return False
        parameters = parameters[1:]

    positional = [p for p in parameters if p.kind in _POSITIONAL]
    if not positional:
        return False
    first, rest = positional[0], positional[1:]
    if first.annotation not in _STR_ANNOTATIONS:
        return False
    if any(p.default is inspect.Parameter.empty for p in rest):
        return False
    return not any(
        p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
        for p in parameters
    )


def find_default_method(handler_type: type, group: str) -> Optional[str]:
    """Name of the method declared as `group(self, arg: str)`, or None."""
    member = vars(handler_type).get(group)
    if member is None:
        return None
    func, takes_self = _plain_function(member)
    if not callable(func) or not accepts_single_string(func, takes_self=takes_self):
        logger.debug("%s.%s does not accept a single string; no default command",
                     handler_type.__qualname__, group)
        return None
    return group


def iter_subcommand_methods(handler_type: type) -> Iterator[tuple[str, CommandMeta]]:
    """Yield (method name, metadata) for every declared, marked method."""
    for attr_name, member in vars(handler_type).items():
        func, takes_self = _plain_function(member)
        if isinstance(func, type) or not callable(func):
            continue
        meta = get_command_meta(member) or get_command_meta(func)
        if meta is None:
            continue
        if not meta.value:
            raise CommandConfigurationError(
                f"{handler_type.__qualname__}.{attr_name} declares an empty command name")
        if not accepts_single_string(func, takes_self=takes_self):
            raise CommandConfigurationError(
                f"{handler_type.__qualname__}.{attr_name} is marked as command "
                f"'{meta.value}' but does not accept a single string argument")
        logger.debug("%s.%s is marked as command '%s'",
                     handler_type.__qualname__, attr_name, meta.value)
        yield attr_name, meta


def discover(handler: Any) -> DiscoveredHandler:
    """Extract the command metadata of one handler object."""
    handler_type = resolve_handler_type(handler)
    meta = get_command_meta(handler_type)
    if meta is None:
        raise CommandConfigurationError(
            f"{handler_type.__qualname__} is not marked with @shell_command")
    if not meta.value:
        raise CommandConfigurationError(
            f"{handler_type.__qualname__} declares an empty group name")

    logger.debug("Discovering commands of %s (group '%s')",
                 handler_type.__qualname__, meta.value)
    return DiscoveredHandler(
        handler=handler,
        handler_type=handler_type,
        meta=meta,
        default_method=find_default_method(handler_type, meta.value),
        subcommands=tuple(iter_subcommand_methods(handler_type)),
    )


def discover_all(handlers: Iterable[Any]) -> list[DiscoveredHandler]:
    """Discover every handler, failing on the first malformed one."""
    return [discover(handler) for handler in handlers]
