"""Tests for placeholder substitution."""

from __future__ import annotations

import uuid

import pytest

from docrender.rendering import substitution
from docrender.rendering.substitution import MissingParameterError, replace_parameters


def test_no_template_joins_content_and_tooltips() -> None:
    result = replace_parameters("content", {"content": "BODY", "tooltips": "TIPS"}, None)
    assert result == "BODY\n\nTIPS"


def test_no_template_missing_tooltips_raises() -> None:
    with pytest.raises(MissingParameterError) as excinfo:
        replace_parameters("content", {"content": "BODY"}, None)
    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.args == ("tooltips",)


def test_no_template_missing_content_tag_raises() -> None:
    with pytest.raises(MissingParameterError):
        replace_parameters("document", {"tooltips": "TIPS"}, None)


def test_template_replaces_every_occurrence() -> None:
    template = "<title>{title}</title><h1>{title}</h1>{document}"
    result = replace_parameters("document", {"title": "Intro", "document": "<p>x</p>"}, template)
    assert result == "<title>Intro</title><h1>Intro</h1><p>x</p>"


@pytest.mark.parametrize(
    "parameters",
    [
        {"a": "{b}", "b": "X"},
        {"b": "X", "a": "{b}"},
    ],
)
def test_values_are_not_substituted_again(parameters: dict[str, str]) -> None:
    assert replace_parameters("a", parameters, "{a}") == "{b}"


def test_value_containing_its_own_placeholder_is_kept() -> None:
    assert replace_parameters("a", {"a": "<{a}>"}, "[{a}]") == "[<{a}>]"


def test_unknown_placeholders_are_left_literal() -> None:
    result = replace_parameters("document", {"document": "BODY"}, "{document} {missing}")
    assert result == "BODY {missing}"


def test_empty_parameters_leave_template_unchanged() -> None:
    template = "<p>{document}</p>"
    assert replace_parameters("document", {}, template) == template


def test_parameters_absent_from_template_are_noops() -> None:
    template = "static text with {braces} and {other}"
    result = replace_parameters("document", {"document": "BODY", "tooltips": ""}, template)
    assert result == template


def test_substitution_is_stable_when_values_have_no_placeholders() -> None:
    parameters = {"document": "BODY", "page-title": "Title"}
    template = "{page-title}: {document}"
    once = replace_parameters("document", parameters, template)
    assert replace_parameters("document", parameters, once) == once


def test_each_call_draws_a_fresh_token(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[uuid.UUID] = []
    real_uuid4 = uuid.uuid4

    def _recording_uuid4() -> uuid.UUID:
        value = real_uuid4()
        calls.append(value)
        return value

    monkeypatch.setattr(substitution.uuid, "uuid4", _recording_uuid4)

    replace_parameters("a", {"a": "1"}, "{a}")
    replace_parameters("a", {"a": "2"}, "{a}")

    assert len(calls) == 2
    assert calls[0] != calls[1]
