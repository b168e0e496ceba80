"""Configuration loading for docrender (.docrender.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .api.models import ApiOptions, ApiTemplates
from .logging import parse_level
from .models import LiterateOptions, OutputFormat

CONFIG_FILENAME = ".docrender.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LiterateConfig:
    """Literate processing settings from .docrender.yml."""

    prefix: Optional[str] = None
    line_numbers: bool = False
    include_source: bool = False
    generate_anchors: bool = False
    recursive: bool = True
    replacements: Dict[str, str] = field(default_factory=dict)


@dataclass
class ApiConfig:
    """API documentation settings."""

    namespace_template: Optional[str] = None
    module_template: Optional[str] = None
    type_template: Optional[str] = None
    public_only: bool = True
    markdown_comments: bool = True
    source_repo: Optional[str] = None
    source_folder: Optional[Path] = None


@dataclass
class DocRenderConfig:
    """Represents the settings defined in .docrender.yml."""

    root: Path
    template: Optional[Path] = None
    output_format: OutputFormat = OutputFormat.HTML
    layout_roots: List[Path] = field(default_factory=list)
    literate: LiterateConfig = field(default_factory=LiterateConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: Optional[int] = None

    def literate_options(self) -> LiterateOptions:
        """Return literate options seeded from this configuration."""
        return LiterateOptions(
            template=self.template,
            output_format=self.output_format,
            prefix=self.literate.prefix,
            line_numbers=self.literate.line_numbers,
            include_source=self.literate.include_source,
            generate_anchors=self.literate.generate_anchors,
            replacements=dict(self.literate.replacements),
            layout_roots=list(self.layout_roots),
            recursive=self.literate.recursive,
        )

    def api_options(self) -> ApiOptions:
        return ApiOptions(
            public_only=self.api.public_only,
            markdown_comments=self.api.markdown_comments,
            source_repo=self.api.source_repo,
            source_folder=str(self.api.source_folder) if self.api.source_folder else None,
        )

    def api_templates(self) -> ApiTemplates:
        defaults = ApiTemplates()
        return ApiTemplates(
            namespace_template=self.api.namespace_template or defaults.namespace_template,
            module_template=self.api.module_template or defaults.module_template,
            type_template=self.api.type_template or defaults.type_template,
        )


def load_config(config_path: Path) -> DocRenderConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocRenderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    top = _Section(data, "")
    try:
        output_format = OutputFormat.parse(top.text("format"))
        log_level = parse_level(top.text("log_level"))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    section = top.child("literate")
    literate = LiterateConfig(
        prefix=section.text("prefix"),
        line_numbers=section.flag("line_numbers", False),
        include_source=section.flag("include_source", False),
        generate_anchors=section.flag("generate_anchors", False),
        recursive=section.flag("recursive", True),
        replacements=section.text_map("replacements"),
    )

    section = top.child("api")
    api = ApiConfig(
        namespace_template=section.text("namespace_template"),
        module_template=section.text("module_template"),
        type_template=section.text("type_template"),
        public_only=section.flag("public_only", True),
        markdown_comments=section.flag("markdown_comments", True),
        source_repo=section.text("source_repo"),
        source_folder=section.path("source_folder", root),
    )

    return DocRenderConfig(
        root=root,
        template=top.path("template", root),
        output_format=output_format,
        layout_roots=[root / entry for entry in top.text_list("layout_roots")],
        literate=literate,
        api=api,
        log_level=log_level,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


_SCALARS = (str, int, float, bool)
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


class _Section:
    """Typed reads from one mapping of the YAML document."""

    def __init__(self, data: Mapping[str, Any], prefix: str) -> None:
        self._data = data
        self._prefix = prefix

    def child(self, key: str) -> "_Section":
        value = self._data.get(key)
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ConfigError(f"{self._where(key)} must be a mapping")
        return _Section(value, self._where(key))

    def text(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        if value is None:
            return None
        if not isinstance(value, _SCALARS):
            raise ConfigError(f"{self._where(key)} must be a scalar value")
        return str(value)

    def path(self, key: str, root: Path) -> Optional[Path]:
        value = self.text(key)
        return root / value if value else None

    def flag(self, key: str, default: bool) -> bool:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ConfigError(f"{self._where(key)} must be true or false, got {value!r}")

    def text_list(self, key: str) -> List[str]:
        value = self._data.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list) and all(isinstance(item, _SCALARS) for item in value):
            return [str(item) for item in value]
        raise ConfigError(f"{self._where(key)} must be a list of strings")

    def text_map(self, key: str) -> Dict[str, str]:
        section = self.child(key)
        return {str(name): section.text(str(name)) or "" for name in section._data}

    def _where(self, key: str) -> str:
        return f"{self._prefix}.{key}" if self._prefix else key
