"""Data handed to the API documentation templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


@dataclass
class ApiMember:
    """A function, method or property."""

    name: str
    kind: str
    signature: str
    summary: str
    comment: str
    source_url: Optional[str] = None


@dataclass
class ApiType:
    """A class and its documented members."""

    name: str
    url_name: str
    module: str
    summary: str
    comment: str
    bases: List[str] = field(default_factory=list)
    methods: List[ApiMember] = field(default_factory=list)
    properties: List[ApiMember] = field(default_factory=list)
    source_url: Optional[str] = None


@dataclass
class ApiModule:
    """A module with its top-level functions and classes."""

    name: str
    url_name: str
    summary: str
    comment: str
    functions: List[ApiMember] = field(default_factory=list)
    classes: List[ApiType] = field(default_factory=list)
    source_url: Optional[str] = None


@dataclass
class ApiDocs:
    """Everything collected for one documentation run."""

    name: str
    modules: List[ApiModule]
    properties: Dict[str, str] = field(default_factory=dict)

    @property
    def types(self) -> List[ApiType]:
        return [cls for module in self.modules for cls in module.classes]


@dataclass
class ApiOptions:
    """Settings for collecting API documentation."""

    name: Optional[str] = None
    public_only: bool = True
    markdown_comments: bool = True
    source_repo: Optional[str] = None
    source_folder: Optional[str] = None
    url_range_highlight: Optional[Callable[[str, int, int], str]] = None
    parameters: Dict[str, str] = field(default_factory=dict)


@dataclass
class ApiTemplates:
    """Template names used for the index, module and class pages."""

    namespace_template: str = "namespaces.html.j2"
    module_template: str = "module.html.j2"
    type_template: str = "type.html.j2"
