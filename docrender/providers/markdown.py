"""Markdown documents rendered to HTML or LaTeX."""

from __future__ import annotations

import html
from pathlib import Path
from typing import Callable, List, Optional

import markdown
import pypandoc
from markdown.extensions.toc import slugify
from pygments.formatters import HtmlFormatter

from ..logging import get_logger
from ..models import (
    CONTENT_TAG,
    PAGE_SOURCE_KEY,
    PAGE_TITLE_KEY,
    SOURCE_KEY,
    TOOLTIPS_KEY,
    LiterateOptions,
    LiterateResult,
    OutputFormat,
)
from .base import ContentProvider

HIGHLIGHT_CLASS = "highlight"

_LOGGER = get_logger("providers.markdown")


class MarkdownProvider(ContentProvider):
    """Renders markdown files with fenced code, tables and highlighted code blocks."""

    suffixes = (".md", ".markdown")

    def produce(self, source: Path, options: LiterateOptions) -> LiterateResult:
        text = source.read_text(encoding="utf-8")
        return self.produce_text(text, options, source_name=source.name)

    def produce_text(
        self, text: str, options: LiterateOptions, *, source_name: str = ""
    ) -> LiterateResult:
        """Render raw source ``text`` as if it had been read from ``source_name``."""
        document = self.to_markdown(text)
        if options.customize_document is not None:
            document = options.customize_document(document)

        converter = _build_converter(options)
        html_body = converter.convert(document)
        title = _first_heading(converter.toc_tokens)

        if options.output_format is OutputFormat.LATEX:
            _LOGGER.debug("Converting %s to LaTeX with pandoc", source_name or "document")
            body = pypandoc.convert_text(document, "latex", format="markdown")
            tooltips = ""
        else:
            body = html_body
            tooltips = _highlight_styles() if f'class="{HIGHLIGHT_CLASS}' in body else ""

        parameters = dict(options.replacements)
        parameters.update(
            {
                CONTENT_TAG: body,
                TOOLTIPS_KEY: tooltips,
                PAGE_TITLE_KEY: title,
                PAGE_SOURCE_KEY: source_name,
            }
        )
        if options.include_source:
            parameters[SOURCE_KEY] = (
                text if options.output_format is OutputFormat.LATEX else html.escape(text)
            )
        return LiterateResult(content_tag=CONTENT_TAG, parameters=parameters)

    def to_markdown(self, text: str) -> str:
        """Return the markdown form of the source text."""
        return text


def _build_converter(options: LiterateOptions) -> markdown.Markdown:
    return markdown.Markdown(
        extensions=["fenced_code", "tables", "codehilite", "toc"],
        extension_configs={
            "codehilite": {
                "css_class": HIGHLIGHT_CLASS,
                "linenums": options.line_numbers,
                "guess_lang": False,
            },
            "toc": {
                "anchorlink": options.generate_anchors,
                "slugify": _prefixed_slugify(options.prefix),
            },
        },
    )


def _prefixed_slugify(prefix: Optional[str]) -> Callable[[str, str], str]:
    if not prefix:
        return slugify

    def _slugify(value: str, separator: str) -> str:
        return f"{prefix}{separator}{slugify(value, separator)}"

    return _slugify


def _first_heading(tokens: List[dict]) -> str:
    if not tokens:
        return ""
    return html.unescape(tokens[0].get("name", ""))


def _highlight_styles() -> str:
    styles = HtmlFormatter().get_style_defs(f".{HIGHLIGHT_CLASS}")
    return f"<style>\n{styles}\n</style>"


__all__ = ["HIGHLIGHT_CLASS", "MarkdownProvider"]
