#!/usr/bin/env python3
# sshd_shell/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: startup pipeline with Linux-style [ OK ] / [FAILED] lines.
- BootState: dataclass holding config, logger, registry and handler count.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
