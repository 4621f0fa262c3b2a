# plugins/echo/entrypoint.py
from __future__ import annotations

from sshd_shell.commands import shell_command


@shell_command("echo", description="Print the argument back.")
class EchoCommands:

    def echo(self, arg: str) -> str:
        return arg

    @shell_command("upper", description="Print the argument in upper case.")
    def upper(self, arg: str) -> str:
        return arg.upper()

    @shell_command("reverse", description="Print the argument reversed.")
    def reverse(self, arg: str) -> str:
        return arg[::-1]
