"""Base classes for content providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ..models import LiterateOptions, LiterateResult


class UnsupportedSourceError(ValueError):
    """Raised when no provider understands a source file."""


class ContentProvider(ABC):
    """Contract for turning a source document into a content fragment and parameters."""

    suffixes: Sequence[str] = ()

    def supports(self, source: Path) -> bool:
        """Return True when this provider should handle ``source``."""
        return source.suffix.lower() in self.suffixes

    @abstractmethod
    def produce(self, source: Path, options: LiterateOptions) -> LiterateResult:
        """Render ``source`` and return its content tag and parameters."""


def provider_for(source: Path, providers: Sequence[ContentProvider]) -> ContentProvider:
    """Return the first provider that supports ``source``."""
    for provider in providers:
        if provider.supports(source):
            return provider
    raise UnsupportedSourceError(f"No content provider handles {source.name}")
