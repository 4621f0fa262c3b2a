#!/usr/bin/env python3
# sshd_shell/interface/invoker.py
from __future__ import annotations

"""
Command invocation and error rendering.

invoke() runs a descriptor's callback with the raw argument string:
- the returned text is the command output,
- SessionInterrupted (and KeyboardInterrupt / SystemExit) propagate untouched,
- any other exception is logged and rendered by report_error(), and that
  text is returned as ordinary output.

Both functions are stateless and safe to call from concurrent sessions.
"""

import logging
from typing import Optional

from sshd_shell.commands import CommandDescriptor, UnknownCommandError

logger = logging.getLogger(__name__)

ERROR_HEADER = "Error performing method invocation"
GENERIC_ERROR_HINT = "Please check server logs for more information"


def verbose_errors_enabled() -> bool:
    """Default verbosity: follow the operator log's DEBUG level."""
    return logger.isEnabledFor(logging.DEBUG)


def report_error(
    exc: BaseException,
    *,
    verbose: Optional[bool] = None,
    newline: str = "\r\n",
) -> str:
    """
    Log `exc` with its traceback and return text safe for a remote user.

    With verbose diagnostics the text carries the exception type and
    message; otherwise it only points at the server logs.
    """
    logger.error(ERROR_HEADER, exc_info=exc)
    if verbose is None:
        verbose = verbose_errors_enabled()
    detail = f"{type(exc).__name__}: {exc}" if verbose else GENERIC_ERROR_HINT
    return f"{ERROR_HEADER}{newline}{detail}"


def invoke(
    descriptor: CommandDescriptor,
    argument: Optional[str],
    *,
    verbose: Optional[bool] = None,
    newline: str = "\r\n",
) -> str:
    """Run the descriptor's callback and return its display text."""
    if descriptor.callback is None:
        # Sessions resolve lines with resolve_line(), which never hands out
        # a descriptor without a callback.
        raise UnknownCommandError(descriptor.group, descriptor.name)

    try:
        result = descriptor.callback(argument if argument is not None else "")
    except Exception as exc:
        return report_error(exc, verbose=verbose, newline=newline)

    return "" if result is None else str(result)
