#!/usr/bin/env python3
# sshd_shell/interface/cli.py
from __future__ import annotations

"""
Session input/output frontends.

- StreamCLI: line I/O over a text stream pair. An SSH channel adapter hands
  its input/output streams to this class.
- PromptToolkitCLI: local console with history and completion.

get_line() raises EOFError when the input is exhausted.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory, InMemoryHistory

from sshd_shell.commands import CommandRegistry
from sshd_shell.interface.completion import split_current_token, suggest

# History location in the user home directory
HISTORY_FILE_PATH = Path.home() / ".sshd_shell_history"


class BaseCLI:
    """
    Base interface for session frontends.

    Subclasses implement get_line() and write(); setup() and teardown()
    are optional. Context manager support guarantees teardown.
    """

    newline = "\r\n"

    def setup(self) -> None:
        ...

    def get_line(self, prompt: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, text: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class StreamCLI(BaseCLI):
    """
    Line-oriented frontend over arbitrary text streams.

    Remote terminals send "\\r" or "\\r\\n"; both are stripped. With `echo`,
    the typed line is written back the way a terminal in raw mode expects.
    """

    def __init__(
        self,
        stdin: TextIO,
        stdout: TextIO,
        *,
        newline: str = "\r\n",
        echo: bool = False,
    ) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.newline = newline
        self.echo = echo

    def get_line(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        raw = self.stdin.readline()
        if raw == "":
            raise EOFError
        line = raw.rstrip("\r\n")
        if self.echo:
            self.stdout.write(line + self.newline)
        return line

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()


class _RegistryCompleter(Completer):
    """prompt_toolkit adapter over completion.suggest."""

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def get_completions(self, document, complete_event):
        text_before_cursor = document.text_before_cursor
        _, current_prefix = split_current_token(text_before_cursor)
        for word in suggest(self.registry, text_before_cursor):
            # replace exactly the current token
            yield Completion(word, start_position=-len(current_prefix))


class PromptToolkitCLI(BaseCLI):
    """Local line editor with history and live completion."""

    newline = "\n"

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        history_path: Optional[Path] = HISTORY_FILE_PATH,
        complete_while_typing: bool = True,
    ) -> None:
        self.history_path = history_path
        self._session: PromptSession = PromptSession(
            history=FileHistory(str(history_path)) if history_path else InMemoryHistory(),
            completer=_RegistryCompleter(registry),
            complete_while_typing=complete_while_typing,
        )

    def setup(self) -> None:
        if self.history_path:
            self.history_path.touch(exist_ok=True)

    def get_line(self, prompt: str) -> str:
        return self._session.prompt(prompt)

    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()


def make_cli(registry: CommandRegistry) -> BaseCLI:
    """Pick prompt_toolkit for an interactive console, plain streams otherwise."""
    if sys.stdin.isatty() and sys.stdout.isatty():
        return PromptToolkitCLI(registry)
    return StreamCLI(sys.stdin, sys.stdout, newline="\n")
