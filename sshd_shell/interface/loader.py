#!/usr/bin/env python3
# sshd_shell/interface/loader.py
from __future__ import annotations

"""
Handler loader.

Features:
- Imports all modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage.
- Instantiates every handler class marked with @shell_command during import.
- Picks up pre-built handler objects exported as HANDLERS.
- filter_handlers keeps only objects whose class carries group metadata.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable

from sshd_shell.commands import CATALOG, CommandConfigurationError, get_command_meta, resolve_handler_type

logger = logging.getLogger(__name__)


def _exported_handlers(module: ModuleType) -> list[Any]:
    """Return HANDLERS exported by a module, if present."""
    objs = getattr(module, "HANDLERS", None)
    if objs is None:
        return []
    if isinstance(objs, (str, bytes)) or not isinstance(objs, Iterable):
        raise CommandConfigurationError(
            f"{module.__name__}.HANDLERS must be an iterable of handler objects")
    return list(objs)


def import_plugin_modules(package_name: str = "plugins") -> list[ModuleType]:
    """
    Import all public modules under `package_name`.

    Supported layouts:
      1) Plain modules: plugins/foo.py -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint
    """
    package = importlib.import_module(package_name)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]
    if not package_paths:
        raise CommandConfigurationError(
            f"'{package_name}' must be a package (folder) with modules.")

    modules: list[ModuleType] = [package]
    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            if modinfo.name.startswith("_"):
                # Ignore private modules
                continue
            module_name = f"{package_name}.{modinfo.name}"
            if modinfo.ispkg and (Path(base_path) / modinfo.name / "entrypoint.py").exists():
                module_name = f"{module_name}.entrypoint"
            logger.debug("Importing handler module %s", module_name)
            modules.append(importlib.import_module(module_name))
    return modules


def filter_handlers(objects: Iterable[Any]) -> list[Any]:
    """Keep only objects whose effective class carries group metadata."""
    return [obj for obj in objects if get_command_meta(resolve_handler_type(obj)) is not None]


def load_handlers(package_name: str = "plugins") -> list[Any]:
    """
    Import the plugin package and return one object per handler.

    Marked classes are instantiated with no arguments, in catalog order;
    HANDLERS exports follow. A class that already has an exported instance
    is not instantiated again.
    """
    modules = import_plugin_modules(package_name)

    exported: list[Any] = []
    for module in modules:
        exported.extend(_exported_handlers(module))
    exported_types = {resolve_handler_type(obj) for obj in exported}

    handlers: list[Any] = []
    for handler_type in CATALOG.all():
        if handler_type in exported_types:
            continue
        module_name = handler_type.__module__
        if module_name != package_name and not module_name.startswith(f"{package_name}."):
            continue
        logger.debug("Instantiating handler %s", handler_type.__qualname__)
        handlers.append(handler_type())
    handlers.extend(exported)

    return filter_handlers(handlers)
