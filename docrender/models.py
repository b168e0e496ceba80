"""Core data models shared across docrender components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

CONTENT_TAG = "document"
TOOLTIPS_KEY = "tooltips"
PAGE_TITLE_KEY = "page-title"
PAGE_SOURCE_KEY = "page-source"
SOURCE_KEY = "source"


class OutputFormat(str, Enum):
    """Target markup for rendered pages."""

    HTML = "html"
    LATEX = "latex"

    @property
    def extension(self) -> str:
        return ".tex" if self is OutputFormat.LATEX else ".html"

    @classmethod
    def parse(cls, value: str | None) -> "OutputFormat":
        """Return the format named by ``value``; HTML when unset."""
        if not value:
            return cls.HTML
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown output format: {value!r}") from exc


@dataclass
class LiterateResult:
    """Rendered content fragment plus the parameters offered to templates."""

    content_tag: str
    parameters: Dict[str, str]


@dataclass
class LiterateOptions:
    """Knobs for processing markdown files, scripts and directories."""

    template: Optional[Path] = None
    output_format: OutputFormat = OutputFormat.HTML
    prefix: Optional[str] = None
    line_numbers: bool = False
    include_source: bool = False
    generate_anchors: bool = False
    replacements: Dict[str, str] = field(default_factory=dict)
    layout_roots: List[Path] = field(default_factory=list)
    recursive: bool = True
    customize_document: Optional[Callable[[str], str]] = None
