#!/usr/bin/env python3
# sshd_shell/config/__init__.py
from __future__ import annotations

"""
Package for shell configuration.

Provides the layered loader (defaults, config files, SSHD_SHELL_* environment
variables) and the frozen ShellConfig it returns.
"""


from .config import DEFAULTS, ENV_PREFIX, ShellConfig, load_config

__all__ = [
    "DEFAULTS",
    "ENV_PREFIX",
    "ShellConfig",
    "load_config",
]
