"""API documentation collected from Python modules."""

from .generator import generate_api_docs
from .introspect import collect_api
from .models import ApiDocs, ApiMember, ApiModule, ApiOptions, ApiTemplates, ApiType

__all__ = [
    "ApiDocs",
    "ApiMember",
    "ApiModule",
    "ApiOptions",
    "ApiTemplates",
    "ApiType",
    "collect_api",
    "generate_api_docs",
]
