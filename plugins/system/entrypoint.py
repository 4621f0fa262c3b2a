# plugins/system/entrypoint.py
from __future__ import annotations

import getpass
import os
import platform
import time
from datetime import timedelta

from sshd_shell.commands import shell_command


def _format_uptime(seconds: float) -> str:
    return str(timedelta(seconds=int(seconds)))


@shell_command("system", description="Host, interpreter and process summary.")
class SystemCommands:
    """Read-only host information."""

    def __init__(self) -> None:
        self._started = time.monotonic()

    def system(self, arg: str) -> str:
        lines = [
            f"Host:     {platform.node() or '(unknown)'}",
            f"OS:       {platform.system()} {platform.release()}",
            f"Python:   {platform.python_implementation()} {platform.python_version()}",
            f"PID:      {os.getpid()}",
            f"Uptime:   {self.uptime('')}",
        ]
        return "\r\n".join(lines)

    @shell_command("uptime", description="Time since the shell started.")
    def uptime(self, arg: str) -> str:
        return _format_uptime(time.monotonic() - self._started)

    @shell_command("python", description="Interpreter version.")
    def python(self, arg: str) -> str:
        return f"{platform.python_implementation()} {platform.python_version()}"

    @shell_command("whoami", description="User the server process runs as.")
    def whoami(self, arg: str) -> str:
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            # no passwd entry / no login name (containers)
            return str(os.getuid()) if hasattr(os, "getuid") else "(unknown)"
