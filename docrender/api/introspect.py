"""Collect API documentation from importable Python modules."""

from __future__ import annotations

import html
import importlib
import inspect
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, List, Optional

import markdown

from ..logging import get_logger
from .models import ApiDocs, ApiMember, ApiModule, ApiOptions, ApiType

_LOGGER = get_logger("api.introspect")


def collect_api(module_names: Iterable[str], options: ApiOptions | None = None) -> ApiDocs:
    """Import ``module_names`` and describe their public surface."""
    options = options or ApiOptions()
    imported = [importlib.import_module(name) for name in module_names]
    collector = _Collector(options, [module.__name__ for module in imported])
    modules = [collector.describe_module(module) for module in imported]
    if options.name:
        name = options.name
    elif modules:
        name = modules[0].name.split(".")[0]
    else:
        name = "API"
    properties = {"project-name": name}
    properties.update(options.parameters)
    return ApiDocs(name=name, modules=modules, properties=properties)


def default_url_range(url: str, start: int, end: int) -> str:
    return f"{url}#L{start}-L{end}"


def url_name(qualified_name: str) -> str:
    return qualified_name.lower().replace(".", "-").replace("_", "-")


class _Collector:
    def __init__(self, options: ApiOptions, module_names: Iterable[str] = ()) -> None:
        self.options = options
        self._highlight = options.url_range_highlight or default_url_range
        # index.html belongs to the namespace page; modules outrank their classes.
        self._taken = {"index"}
        self._module_pages = {name: self._claim(name) for name in module_names}

    def describe_module(self, module: ModuleType) -> ApiModule:
        _LOGGER.info("Collecting module: %s", module.__name__)
        page_name = self._module_pages.get(module.__name__) or self._claim(module.__name__)
        doc = inspect.getdoc(module) or ""
        functions: List[ApiMember] = []
        classes: List[ApiType] = []
        for name, obj in sorted(vars(module).items()):
            if not self._include(name) or getattr(obj, "__module__", None) != module.__name__:
                continue
            if inspect.isclass(obj):
                classes.append(self.describe_class(obj))
            elif inspect.isfunction(obj):
                functions.append(self.describe_member(name, obj, "function"))
        return ApiModule(
            name=module.__name__,
            url_name=page_name,
            summary=_summary(doc),
            comment=self._comment(doc),
            functions=functions,
            classes=classes,
            source_url=self._source_url(module),
        )

    def describe_class(self, cls: type) -> ApiType:
        doc = inspect.getdoc(cls) or ""
        methods: List[ApiMember] = []
        properties: List[ApiMember] = []
        for name, attr in sorted(vars(cls).items()):
            if not self._include(name, member=True):
                continue
            if isinstance(attr, property):
                properties.append(self.describe_member(name, attr, "property"))
            elif isinstance(attr, staticmethod):
                methods.append(self.describe_member(name, attr.__func__, "staticmethod"))
            elif isinstance(attr, classmethod):
                methods.append(self.describe_member(name, attr.__func__, "classmethod"))
            elif inspect.isfunction(attr):
                methods.append(self.describe_member(name, attr, "method"))
        qualified = f"{cls.__module__}.{cls.__qualname__}"
        return ApiType(
            name=cls.__qualname__,
            url_name=self._claim(qualified),
            module=cls.__module__,
            summary=_summary(doc),
            comment=self._comment(doc),
            bases=[base.__name__ for base in cls.__bases__ if base is not object],
            methods=methods,
            properties=properties,
            source_url=self._source_url(cls),
        )

    def describe_member(self, name: str, obj: Any, kind: str) -> ApiMember:
        doc = inspect.getdoc(obj) or ""
        target = obj.fget if isinstance(obj, property) else obj
        return ApiMember(
            name=name,
            kind=kind,
            signature=_signature(target) if kind != "property" else "",
            summary=_summary(doc),
            comment=self._comment(doc),
            source_url=self._source_url(target),
        )

    def _claim(self, qualified: str) -> str:
        """Return a page name for ``qualified`` that no earlier page uses.

        Names are case-folded, so ``pkg.widget`` and ``pkg.Widget`` would
        share a file; later claimants get a numeric suffix.
        """
        base = url_name(qualified)
        candidate, counter = base, 0
        while candidate in self._taken:
            counter += 1
            candidate = f"{base}-{counter}"
        if candidate != base:
            _LOGGER.debug("Page name %s is taken; using %s for %s", base, candidate, qualified)
        self._taken.add(candidate)
        return candidate

    def _include(self, name: str, *, member: bool = False) -> bool:
        if name.startswith("__") and name.endswith("__"):
            return member and name == "__init__"
        if self.options.public_only and name.startswith("_"):
            return False
        return True

    def _comment(self, doc: str) -> str:
        if not doc:
            return ""
        if self.options.markdown_comments:
            return markdown.markdown(doc, extensions=["fenced_code", "tables"])
        return f"<pre>{html.escape(doc)}</pre>"

    def _source_url(self, obj: Any) -> Optional[str]:
        repo, folder = self.options.source_repo, self.options.source_folder
        if not repo or not folder or obj is None:
            return None
        try:
            source_file = inspect.getsourcefile(obj)
            lines, start = inspect.getsourcelines(obj)
        except (OSError, TypeError):
            return None
        if source_file is None:
            return None
        try:
            relative = Path(source_file).resolve().relative_to(Path(folder).resolve())
        except ValueError:
            _LOGGER.debug("%s is outside the source folder %s", source_file, folder)
            return None
        url = f"{repo.rstrip('/')}/{relative.as_posix()}"
        if inspect.ismodule(obj):
            return url
        return self._highlight(url, start, start + len(lines) - 1)


def _summary(doc: str) -> str:
    return doc.strip().split("\n\n", 1)[0].replace("\n", " ") if doc else ""


def _signature(obj: Any) -> str:
    try:
        return str(inspect.signature(obj))
    except (TypeError, ValueError):
        return ""


__all__ = ["collect_api", "default_url_range", "url_name"]
