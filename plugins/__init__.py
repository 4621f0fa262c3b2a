# plugins/__init__.py
"""
Bundled command handlers.

Every public module (or subpackage entrypoint.py) is imported at boot and
each class marked with @shell_command becomes one command group.
"""
