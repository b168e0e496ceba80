"""Choose between the template engine and raw placeholder substitution."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from ..logging import get_logger

ENGINE_SUFFIXES = (".j2", ".jinja", ".jinja2")

_LOGGER = get_logger("rendering.resolver")


class TemplateStrategy(Enum):
    ENGINE = "engine"
    FALLBACK = "fallback"


def is_engine_template(template: Path | str) -> bool:
    """Return True when the template's file name carries a Jinja2 extension."""
    # str.lower() does not depend on the process locale.
    return Path(template).name.lower().endswith(ENGINE_SUFFIXES)


def resolve_strategy(template: Optional[Path | str]) -> TemplateStrategy:
    """Pick the rendering strategy for an optional template reference.

    A template with an unrecognised extension is treated as a plain text
    template with ``{name}`` placeholders rather than rejected.
    """
    if template is not None and is_engine_template(template):
        return TemplateStrategy.ENGINE
    if template is not None:
        _LOGGER.debug(
            "Template %s has no engine extension (%s); using placeholder substitution",
            template,
            ", ".join(ENGINE_SUFFIXES),
        )
    return TemplateStrategy.FALLBACK


__all__ = ["ENGINE_SUFFIXES", "TemplateStrategy", "is_engine_template", "resolve_strategy"]
