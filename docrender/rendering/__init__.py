"""Template resolution, placeholder substitution and page output."""

from .engine import JinjaRenderer
from .output import default_output, write_text
from .pipeline import generate_file
from .resolver import ENGINE_SUFFIXES, TemplateStrategy, is_engine_template, resolve_strategy
from .substitution import MissingParameterError, replace_parameters

__all__ = [
    "ENGINE_SUFFIXES",
    "JinjaRenderer",
    "MissingParameterError",
    "TemplateStrategy",
    "default_output",
    "generate_file",
    "is_engine_template",
    "replace_parameters",
    "resolve_strategy",
    "write_text",
]
