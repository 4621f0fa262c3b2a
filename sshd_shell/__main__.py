#!/usr/bin/env python3
# sshd_shell/__main__.py
from __future__ import annotations

"""Boot the shell and run one local session on the console."""

import sys

from sshd_shell.boot import boot_sequence
from sshd_shell.config import load_config
from sshd_shell.interface import ShellSession, make_cli
from sshd_shell.ui import print_line


def main() -> int:
    config = load_config()
    if not config.enabled:
        print_line("Shell is disabled (ENABLED=false).")
        return 0

    state = boot_sequence(config, file=sys.stderr)
    cli = make_cli(state.registry)
    session = ShellSession(
        state.registry,
        cli,
        prompt=config.prompt,
        show_banner=config.show_banner,
        verbose=config.verbose_errors,
    )
    try:
        session.run()
    except KeyboardInterrupt:
        print_line()
    return 0


if __name__ == "__main__":
    sys.exit(main())
