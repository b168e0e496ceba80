"""Render literate sources and API metadata into documentation pages."""

from .models import LiterateOptions, LiterateResult, OutputFormat
from .rendering.pipeline import (
    generate_file,
    process_directory,
    process_document,
    process_markdown,
    process_script,
)

__all__ = [
    "LiterateOptions",
    "LiterateResult",
    "OutputFormat",
    "generate_file",
    "process_directory",
    "process_document",
    "process_markdown",
    "process_script",
]
