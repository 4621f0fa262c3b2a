#!/usr/bin/env python3
# sshd_shell/interface/session.py
from __future__ import annotations

"""
Interactive session loop.

One ShellSession per connected user. Lines are dispatched sequentially;
the registry is shared read-only between sessions. The session ends on end
of input, on exit/quit, or when a command raises SessionInterrupted.
"""

import itertools
import logging
from typing import Optional

from sshd_shell.commands import CommandRegistry, SessionInterrupted
from sshd_shell.interface.cli import BaseCLI
from sshd_shell.interface.handler import HELP_TEXT, handle_line

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


class ShellSession:
    """Prompt, dispatch and print until the session is terminated."""

    def __init__(
        self,
        registry: CommandRegistry,
        cli: BaseCLI,
        *,
        prompt: str = "app",
        show_banner: bool = True,
        verbose: Optional[bool] = None,
    ) -> None:
        self.registry = registry
        self.cli = cli
        self.prompt = prompt
        self.show_banner = show_banner
        self.verbose = verbose
        self.session_id = next(_session_ids)
        self.commands_run = 0

    @property
    def prompt_text(self) -> str:
        return f"{self.prompt}> "

    def run(self) -> int:
        """Run the loop; return the number of lines dispatched."""
        newline = self.cli.newline
        logger.info("Session %d started", self.session_id)
        with self.cli:
            if self.show_banner:
                self.cli.write(HELP_TEXT + newline)
            try:
                while True:
                    try:
                        line = self.cli.get_line(self.prompt_text)
                    except EOFError:
                        logger.debug("Session %d reached end of input", self.session_id)
                        break
                    output = handle_line(
                        self.registry, line, verbose=self.verbose, newline=newline)
                    self.commands_run += 1
                    if output is not None:
                        self.cli.write(output + newline)
            except SessionInterrupted:
                logger.debug("Session %d interrupted", self.session_id)
        logger.info("Session %d ended after %d line(s)", self.session_id, self.commands_run)
        return self.commands_run
