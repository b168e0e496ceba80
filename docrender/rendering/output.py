"""Output path defaulting and file writes."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import OutputFormat


def default_output(
    explicit: Optional[Path | str],
    input_path: Path | str,
    output_format: Optional[OutputFormat] = None,
) -> Path:
    """Return ``explicit`` if given, else ``input_path`` with a format extension."""
    if explicit is not None:
        return Path(explicit)
    output_format = output_format or OutputFormat.HTML
    return Path(input_path).with_suffix(output_format.extension)


def write_text(path: Path, content: str) -> Path:
    """Overwrite ``path`` with ``content``; the parent directory must exist."""
    path.write_text(content, encoding="utf-8")
    return path


__all__ = ["default_output", "write_text"]
