# plugins/echo/__init__.py
from __future__ import annotations

"""Echo command group, useful to check that a session round-trips text."""
