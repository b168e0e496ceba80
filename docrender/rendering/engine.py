"""Jinja2 rendering over a list of layout roots."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..logging import get_logger

BUNDLED_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"
PROPERTIES_KEY = "properties"

_LOGGER = get_logger("rendering.engine")


class JinjaRenderer:
    """Renders one named template found on the layout roots.

    The bundled template directory is always searched last, so user layout
    roots can shadow the default pages.
    """

    def __init__(self, layout_roots: Iterable[Path | str], template_name: str) -> None:
        self.search_path = _unique_dirs([*layout_roots, BUNDLED_TEMPLATES])
        self.template_name = template_name
        self._env = Environment(
            loader=FileSystemLoader(self.search_path),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, data: Mapping[str, Any]) -> str:
        """Render the template with ``data`` as its context."""
        _LOGGER.debug("Rendering %s from %s", self.template_name, self.search_path)
        template = self._env.get_template(self.template_name)
        return template.render(**data)

    def process_file(self, parameters: Mapping[str, str], model: Any = None) -> str:
        """Render with ``parameters`` exposed only as ``properties``.

        Page parameter names never reach the template's top-level namespace,
        so names such as ``range`` or ``loop`` keep their Jinja2 meaning.
        """
        data: dict[str, Any] = {PROPERTIES_KEY: dict(parameters)}
        if model is not None:
            data["model"] = model
        return self.render(data)


def _unique_dirs(directories: Iterable[Path | str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for directory in directories:
        text = str(directory)
        if text not in seen:
            ordered.append(text)
            seen.add(text)
    return ordered


__all__ = ["BUNDLED_TEMPLATES", "JinjaRenderer", "PROPERTIES_KEY"]
