"""Content providers that turn source documents into page parameters."""

from __future__ import annotations

from typing import List

from .base import ContentProvider, UnsupportedSourceError, provider_for
from .markdown import MarkdownProvider
from .script import ScriptProvider


def default_providers() -> List[ContentProvider]:
    """Return the providers used when the caller does not supply any."""
    return [MarkdownProvider(), ScriptProvider()]


__all__ = [
    "ContentProvider",
    "MarkdownProvider",
    "ScriptProvider",
    "UnsupportedSourceError",
    "default_providers",
    "provider_for",
]
