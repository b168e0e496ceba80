"""Literate Python scripts written in the percent cell format.

A script is split on ``# %%`` markers. ``# %% [markdown]`` cells hold prose
as comment lines, ``# %% [hide]`` cells are dropped from the page, and every
other cell is shown as a highlighted Python block. Lines before the first
marker form a code cell.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from .markdown import MarkdownProvider

_CELL_MARKER = re.compile(r"^#\s*%%(?P<header>.*)$")


@dataclass
class Cell:
    kind: str
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines).strip("\n")


class ScriptProvider(MarkdownProvider):
    """Turns a literate script into markdown before rendering."""

    suffixes = (".py",)

    def to_markdown(self, text: str) -> str:
        blocks: List[str] = []
        for cell in split_cells(text):
            if cell.kind == "markdown":
                blocks.append("\n".join(_uncomment(line) for line in cell.lines).strip("\n"))
            else:
                blocks.append(f"```python\n{cell.text}\n```")
        return "\n\n".join(blocks) + "\n"


def split_cells(text: str) -> List[Cell]:
    """Split script text into visible cells, skipping empty and hidden ones."""
    cells: List[Cell] = []
    current = Cell(kind="code")
    for line in text.splitlines():
        match = _CELL_MARKER.match(line)
        if match:
            cells.append(current)
            current = Cell(kind=_cell_kind(match.group("header")))
            continue
        current.lines.append(line)
    cells.append(current)
    return [cell for cell in cells if cell.kind != "hide" and cell.text.strip()]


def _cell_kind(header: str) -> str:
    header = header.strip().lower()
    if "[markdown]" in header or "[md]" in header:
        return "markdown"
    if "[hide]" in header:
        return "hide"
    return "code"


def _uncomment(line: str) -> str:
    if line.startswith("# "):
        return line[2:]
    if line.strip() == "#":
        return ""
    return line


__all__ = ["Cell", "ScriptProvider", "split_cells"]
