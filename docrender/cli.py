"""CLI entrypoints for docrender commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import TemplateError

from .api import collect_api, generate_api_docs
from .config import ConfigError, DocRenderConfig, load_config
from .logging import configure_logging, get_logger
from .models import LiterateOptions, OutputFormat
from .providers import UnsupportedSourceError
from .rendering.pipeline import process_directory, process_markdown, process_script

_LOGGER = get_logger("cli")


def _shared_parent() -> argparse.ArgumentParser:
    """Options accepted by every sub-command.

    ``--verbose`` defaults to SUPPRESS here so a flag given before the
    sub-command is not reset when the sub-command parser runs.
    """
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log at DEBUG level with logger names (overrides log_level).",
    )
    shared.add_argument(
        "--layout-root",
        dest="layout_roots",
        action="append",
        default=[],
        type=Path,
        help="Directory searched for Jinja2 templates (repeatable).",
    )
    return shared


def _literate_parent() -> argparse.ArgumentParser:
    literate = argparse.ArgumentParser(add_help=False)
    literate.add_argument("--template", type=Path, help="Page template (.j2 for Jinja2, else {name} placeholders).")
    literate.add_argument(
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format (defaults to html).",
    )
    literate.add_argument("--prefix", help="Prefix for generated heading anchors.")
    for flag, text in (
        ("--line-numbers", "Number lines in code blocks."),
        ("--include-source", "Expose the original source text as the 'source' parameter."),
        ("--generate-anchors", "Turn headings into self-links."),
    ):
        # None means "not given", so the config file value stays in force.
        literate.add_argument(flag, action="store_true", default=None, help=text)
    literate.add_argument(
        "--replace",
        dest="replacements",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra template parameter (repeatable).",
    )
    return literate


def _build_parser() -> argparse.ArgumentParser:
    shared = _shared_parent()
    literate = _literate_parent()
    parser = argparse.ArgumentParser(
        prog="docrender",
        description="Render markdown, literate scripts and API docs into pages.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level with logger names (overrides log_level).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .docrender.yml or its directory (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    markdown_parser = subparsers.add_parser("markdown", parents=[shared, literate], help="Render a markdown file.")
    markdown_parser.add_argument("input", type=Path, help="Markdown file to render.")
    markdown_parser.add_argument("-o", "--output", type=Path, help="Output file.")

    script_parser = subparsers.add_parser("script", parents=[shared, literate], help="Render a literate Python script.")
    script_parser.add_argument("input", type=Path, help="Script to render.")
    script_parser.add_argument("-o", "--output", type=Path, help="Output file.")

    directory_parser = subparsers.add_parser(
        "directory",
        parents=[shared, literate],
        help="Render every markdown file and script under a directory.",
    )
    directory_parser.add_argument("input", type=Path, help="Directory to scan.")
    directory_parser.add_argument("-o", "--output", type=Path, help="Output directory (defaults to input).")
    directory_parser.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_false",
        default=None,
        help="Only process files directly inside the input directory.",
    )

    api_parser = subparsers.add_parser("api", parents=[shared], help="Generate API pages for Python modules.")
    api_parser.add_argument("modules", nargs="+", help="Importable module names.")
    api_parser.add_argument("-o", "--output", type=Path, required=True, help="Output directory.")
    api_parser.add_argument("--name", help="Project name shown on the index page.")
    api_parser.add_argument(
        "--include-private",
        action="store_true",
        help="Also document names starting with an underscore.",
    )
    api_parser.add_argument(
        "--no-markdown-comments",
        action="store_true",
        help="Show docstrings verbatim instead of rendering them as markdown.",
    )
    api_parser.add_argument("--source-repo", help="Base URL for source links.")
    api_parser.add_argument("--source-folder", help="Local checkout matching --source-repo.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docrender commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=args.verbose, level=config.log_level)
    _LOGGER.debug("Loaded configuration from %s", config.root)

    try:
        written = _run(args, config)
    except (FileNotFoundError, UnsupportedSourceError) as exc:
        parser.exit(1, f"{exc}\n")
    except (OSError, KeyError, TemplateError, RuntimeError, ValueError) as exc:
        parser.exit(1, f"docrender {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    for path in written:
        print(f"Generated {_relativize(path)}")


def _run(args: argparse.Namespace, config: DocRenderConfig) -> List[Path]:
    if args.command == "api":
        options = config.api_options()
        options.name = args.name
        if args.include_private:
            options.public_only = False
        if args.no_markdown_comments:
            options.markdown_comments = False
        if args.source_repo:
            options.source_repo = args.source_repo
        if args.source_folder:
            options.source_folder = args.source_folder
        api = collect_api(args.modules, options)
        layout_roots = [*args.layout_roots, *config.layout_roots]
        return generate_api_docs(api, args.output, layout_roots, config.api_templates())

    options = _literate_options(args, config)
    if args.command == "markdown":
        return [process_markdown(args.input, args.output, options)]
    if args.command == "script":
        return [process_script(args.input, args.output, options)]
    if args.command == "directory":
        if not args.input.is_dir():
            raise FileNotFoundError(f"{args.input} is not a directory")
        return process_directory(args.input, args.output, options)
    raise UnsupportedSourceError(f"Unknown command {args.command}")  # pragma: no cover - argparse enforces choices


def _literate_options(args: argparse.Namespace, config: DocRenderConfig) -> LiterateOptions:
    options = config.literate_options()
    if args.template is not None:
        options.template = args.template
    if args.output_format:
        options.output_format = OutputFormat.parse(args.output_format)
    if args.prefix is not None:
        options.prefix = args.prefix
    if args.line_numbers is not None:
        options.line_numbers = args.line_numbers
    if args.include_source is not None:
        options.include_source = args.include_source
    if args.generate_anchors is not None:
        options.generate_anchors = args.generate_anchors
    if getattr(args, "recursive", None) is not None:
        options.recursive = args.recursive
    options.replacements.update(_parse_replacements(args.replacements))
    options.layout_roots = [*args.layout_roots, *options.layout_roots]
    _LOGGER.debug("Literate options: %s", options)
    return options


def _parse_replacements(items: Sequence[str]) -> Dict[str, str]:
    replacements: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {item!r}")
        replacements[key] = value
    return replacements


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
