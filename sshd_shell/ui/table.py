#!/usr/bin/env python3
# sshd_shell/ui/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from sshd_shell.ui.ansi import strip_ansi


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Compute visual widths ignoring ANSI sequences."""
    widths: List[int] = []
    for row in rows:
        for col_idx, cell in enumerate(row):
            cell_length = len(strip_ansi(cell))
            if col_idx >= len(widths):
                widths.append(cell_length)
            else:
                widths[col_idx] = max(widths[col_idx], cell_length)
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    border: bool = True,
    newline: str = "\n",
) -> str:
    """
    Return an ASCII table string (ANSI-safe width calculation).

    `newline` joins the rendered lines; remote terminals want "\\r\\n".
    """
    str_rows: List[List[str]] = [[str(cell) for cell in row] for row in rows]
    str_headers = [str(h) for h in headers] if headers is not None else None
    widths = _column_widths(([str_headers] if str_headers else []) + str_rows)
    if not widths:
        return ""

    pad = " " * padding

    def render_row(row: Sequence[str]) -> str:
        cells = list(row) + [""] * (len(widths) - len(row))
        parts = []
        for i, cell in enumerate(cells):
            right = " " * (widths[i] - len(strip_ansi(cell)))
            parts.append(f"{pad}{cell}{right}{pad}")
        return "|" + "|".join(parts) + "|"

    rule = "-" * (sum(widths) + padding * 2 * len(widths) + len(widths) + 1)

    lines: List[str] = []
    if border:
        lines.append(rule)
    if str_headers is not None:
        lines.append(render_row(str_headers))
        lines.append(render_row(["-" * w for w in widths]))
    lines.extend(render_row(row) for row in str_rows)
    if border:
        lines.append(rule)

    return newline.join(lines)
