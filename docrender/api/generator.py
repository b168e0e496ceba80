"""Write API documentation pages with Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger
from ..rendering.engine import JinjaRenderer
from ..rendering.output import write_text
from ..rendering.pipeline import RendererFactory
from .models import ApiDocs, ApiTemplates

_LOGGER = get_logger("api.generator")


def generate_api_docs(
    api: ApiDocs,
    out_dir: Path,
    layout_roots: Iterable[Path] = (),
    templates: ApiTemplates | None = None,
    *,
    renderer_factory: RendererFactory = JinjaRenderer,
) -> List[Path]:
    """Render ``index.html`` plus one page per module and per class.

    Every template sees the page object as ``model`` and the run parameters
    as ``properties``.
    """
    templates = templates or ApiTemplates()
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    roots = list(layout_roots)
    written: List[Path] = []

    _LOGGER.info("Generating: index.html")
    renderer = renderer_factory(roots, templates.namespace_template)
    written.append(write_text(out_dir / "index.html", renderer.process_file(api.properties, model=api)))

    _LOGGER.info("Generating modules...")
    renderer = renderer_factory(roots, templates.module_template)
    for module in api.modules:
        _LOGGER.info("Generating module: %s", module.url_name)
        page = renderer.process_file(api.properties, model=module)
        written.append(write_text(out_dir / f"{module.url_name}.html", page))

    _LOGGER.info("Generating types...")
    renderer = renderer_factory(roots, templates.type_template)
    for api_type in api.types:
        _LOGGER.info("Generating type: %s", api_type.url_name)
        page = renderer.process_file(api.properties, model=api_type)
        written.append(write_text(out_dir / f"{api_type.url_name}.html", page))

    return written


__all__ = ["generate_api_docs"]
