"""Render literate results into pages on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import LiterateOptions, LiterateResult
from ..providers import ContentProvider, MarkdownProvider, ScriptProvider, default_providers
from ..providers.directory import process_sources
from .engine import JinjaRenderer
from .output import default_output, write_text
from .resolver import TemplateStrategy, resolve_strategy
from .substitution import replace_parameters

RendererFactory = Callable[[Sequence[Path | str], str], JinjaRenderer]

_LOGGER = get_logger("rendering.pipeline")


def generate_file(
    content_tag: str,
    parameters: Mapping[str, str],
    template: Optional[Path],
    output: Path,
    layout_roots: Iterable[Path] = (),
    *,
    renderer_factory: RendererFactory = JinjaRenderer,
) -> Path:
    """Render one page and write it to ``output``.

    Jinja2 templates receive the parameters under ``properties``; any other
    template, or none, goes through placeholder substitution.
    """
    strategy = resolve_strategy(template)
    if strategy is TemplateStrategy.ENGINE and template is not None:
        template = Path(template)
        roots = [template.parent, *layout_roots]
        renderer = renderer_factory(roots, template.name)
        text = renderer.process_file(parameters)
    else:
        raw = Path(template).read_text(encoding="utf-8") if template is not None else None
        text = replace_parameters(content_tag, parameters, raw)
    _LOGGER.info("Writing %s", output)
    return write_text(Path(output), text)


def process_document(
    result: LiterateResult,
    output: Path,
    options: LiterateOptions | None = None,
) -> Path:
    """Write a page for an already produced literate result."""
    options = options or LiterateOptions()
    return generate_file(
        result.content_tag,
        result.parameters,
        options.template,
        Path(output),
        options.layout_roots,
    )


def process_markdown(
    input_path: Path,
    output: Optional[Path] = None,
    options: LiterateOptions | None = None,
    *,
    provider: ContentProvider | None = None,
) -> Path:
    """Render a markdown file; output defaults to the input with a format extension."""
    options = options or LiterateOptions()
    provider = provider or MarkdownProvider()
    return _process_file(Path(input_path), output, options, provider)


def process_script(
    input_path: Path,
    output: Optional[Path] = None,
    options: LiterateOptions | None = None,
    *,
    provider: ContentProvider | None = None,
) -> Path:
    """Render a literate script; output defaults to the input with a format extension."""
    options = options or LiterateOptions()
    provider = provider or ScriptProvider()
    return _process_file(Path(input_path), output, options, provider)


def process_directory(
    input_dir: Path,
    output_dir: Optional[Path] = None,
    options: LiterateOptions | None = None,
    *,
    providers: Sequence[ContentProvider] | None = None,
) -> List[Path]:
    """Render every supported source under ``input_dir``.

    Pages are written next to their sources unless ``output_dir`` is given.
    """
    options = options or LiterateOptions()
    input_dir = Path(input_dir)
    output_dir = Path(output_dir) if output_dir is not None else input_dir
    providers = providers if providers is not None else default_providers()
    written: List[Path] = []
    for output, result in process_sources(input_dir, output_dir, providers, options):
        page = process_document(result, output, options)
        if page not in written:
            written.append(page)
    return written


def _process_file(
    input_path: Path,
    output: Optional[Path],
    options: LiterateOptions,
    provider: ContentProvider,
) -> Path:
    _LOGGER.info("Processing %s", input_path)
    result = provider.produce(input_path, options)
    destination = default_output(output, input_path, options.output_format)
    return process_document(result, destination, options)


__all__ = [
    "generate_file",
    "process_directory",
    "process_document",
    "process_markdown",
    "process_script",
]
