# plugins/system/__init__.py
from __future__ import annotations

"""
Host information command group:
- interpreter and platform summary
- process uptime
- current user
"""
