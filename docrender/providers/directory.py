"""Batch discovery of literate sources under a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Sequence, Tuple

from ..logging import get_logger
from ..models import LiterateOptions, LiterateResult
from .base import ContentProvider

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
}

_LOGGER = get_logger("providers.directory")


def iter_sources(input_dir: Path, *, recursive: bool = True) -> Iterator[Path]:
    """Yield files under ``input_dir`` in a stable order."""
    pattern = "**/*" if recursive else "*"
    for path in sorted(input_dir.glob(pattern)):
        if not path.is_file():
            continue
        relative = path.relative_to(input_dir)
        if any(part in _EXCLUDED_DIRS or part.startswith(".") for part in relative.parts[:-1]):
            continue
        yield path


def process_sources(
    input_dir: Path,
    output_dir: Path,
    providers: Sequence[ContentProvider],
    options: LiterateOptions,
) -> Iterator[Tuple[Path, LiterateResult]]:
    """Produce ``(output_path, result)`` for each supported source file.

    Output paths mirror the input tree under ``output_dir``; missing
    sub-directories are created. Sources that differ only by suffix, such as
    ``guide.md`` and ``guide.py``, share one output path: a warning is logged
    and the later source in sorted order overwrites the earlier page.
    """
    claimed: Dict[Path, Path] = {}
    for source in iter_sources(input_dir, recursive=options.recursive):
        provider = next((p for p in providers if p.supports(source)), None)
        if provider is None:
            _LOGGER.debug("Skipping %s: no content provider", source)
            continue
        relative = source.relative_to(input_dir)
        output = (output_dir / relative).with_suffix(options.output_format.extension)
        earlier = claimed.setdefault(output, source)
        if earlier != source:
            _LOGGER.warning(
                "%s and %s both render to %s; keeping the later one",
                earlier.relative_to(input_dir).as_posix(),
                relative.as_posix(),
                output,
            )
            claimed[output] = source
        output.parent.mkdir(parents=True, exist_ok=True)
        _LOGGER.info("Processing %s", relative.as_posix())
        yield output, provider.produce(source, options)


__all__ = ["iter_sources", "process_sources"]
