"""Placeholder substitution used when no template engine handles the page."""

from __future__ import annotations

import uuid
from typing import Mapping, Optional

from ..models import TOOLTIPS_KEY


class MissingParameterError(KeyError):
    """Raised when a parameter required by the no-template output is absent."""


def replace_parameters(
    content_tag: str,
    parameters: Mapping[str, str],
    template_text: Optional[str],
) -> str:
    """Substitute ``{name}`` placeholders in ``template_text``.

    Without a template the result is the content fragment followed by a blank
    line and the tooltips fragment. With a template, every ``{name}`` whose
    name is a parameter key is replaced by its value. Values are inserted
    verbatim: placeholder-shaped text inside a value is never expanded, and
    placeholders with no matching parameter are left as they are.
    """
    if template_text is None:
        return _lookup(parameters, content_tag) + "\n\n" + _lookup(parameters, TOOLTIPS_KEY)

    # Rename keys into a per-call namespace first so a value containing
    # "{other}" cannot be picked up by a later replacement.
    token = uuid.uuid4().hex
    text = template_text
    for key in parameters:
        text = text.replace("{" + key + "}", "{" + key + token + "}")
    for key, value in parameters.items():
        text = text.replace("{" + key + token + "}", value)
    return text


def _lookup(parameters: Mapping[str, str], key: str) -> str:
    try:
        return parameters[key]
    except KeyError:
        raise MissingParameterError(key) from None


__all__ = ["MissingParameterError", "replace_parameters"]
