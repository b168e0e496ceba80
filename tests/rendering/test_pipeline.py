"""Tests for the page rendering pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from docrender.models import LiterateOptions, LiterateResult, OutputFormat
from docrender.providers import markdown as markdown_provider
from docrender.rendering.pipeline import (
    generate_file,
    process_directory,
    process_document,
    process_markdown,
    process_script,
)

PARAMETERS = {"document": "<p>BODY</p>", "tooltips": "TIPS", "page-title": "Guide"}


def test_generate_file_without_template(tmp_path: Path) -> None:
    output = tmp_path / "page.html"

    generate_file("content", {"content": "BODY", "tooltips": "TIPS"}, None, output)

    assert output.read_text(encoding="utf-8") == "BODY\n\nTIPS"


def test_generate_file_with_placeholder_template(tmp_path: Path) -> None:
    template = tmp_path / "page.html"
    template.write_text("<title>{page-title}</title>{document}{unknown}", encoding="utf-8")
    output = tmp_path / "out.html"

    generate_file("document", PARAMETERS, template, output)

    assert output.read_text(encoding="utf-8") == "<title>Guide</title><p>BODY</p>{unknown}"


def test_generate_file_with_jinja_template(tmp_path: Path) -> None:
    template = tmp_path / "page.html.j2"
    template.write_text(
        '<h1>{{ properties["page-title"] }}</h1>{{ properties.document }}\n',
        encoding="utf-8",
    )
    output = tmp_path / "out.html"

    generate_file("document", PARAMETERS, template, output)

    assert output.read_text(encoding="utf-8") == "<h1>Guide</h1><p>BODY</p>\n"


def test_jinja_template_sees_parameters_only_under_properties(tmp_path: Path) -> None:
    template = tmp_path / "page.j2"
    template.write_text("{{ document }}", encoding="utf-8")

    with pytest.raises(UndefinedError):
        generate_file("document", PARAMETERS, template, tmp_path / "out.html")


def test_jinja_template_undefined_member_raises(tmp_path: Path) -> None:
    template = tmp_path / "page.j2"
    template.write_text("{{ properties.missing }}", encoding="utf-8")
    output = tmp_path / "out.html"

    with pytest.raises(UndefinedError):
        generate_file("document", PARAMETERS, template, output)
    assert not output.exists()


def test_jinja_template_extends_layout_root(tmp_path: Path) -> None:
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "base.j2").write_text("[{% block body %}{% endblock %}]", encoding="utf-8")
    pages = tmp_path / "pages"
    pages.mkdir()
    template = pages / "page.J2"
    template.write_text(
        '{% extends "base.j2" %}{% block body %}{{ properties.tooltips }}{% endblock %}',
        encoding="utf-8",
    )
    output = tmp_path / "out.html"

    generate_file("document", PARAMETERS, template, output, [layouts])

    assert output.read_text(encoding="utf-8") == "[TIPS]"


def test_missing_layout_raises_template_not_found(tmp_path: Path) -> None:
    template = tmp_path / "page.j2"
    template.write_text('{% extends "nowhere.j2" %}', encoding="utf-8")

    with pytest.raises(TemplateNotFound):
        generate_file("document", PARAMETERS, template, tmp_path / "out.html")


def test_generate_file_uses_renderer_factory(tmp_path: Path) -> None:
    created: list[tuple[list[str], str]] = []

    class _StubRenderer:
        def __init__(self, roots: Sequence[Path | str], name: str) -> None:
            created.append(([str(root) for root in roots], name))

        def process_file(self, parameters: Mapping[str, str], model: Any = None) -> str:
            return "|".join(sorted(parameters))

    output = tmp_path / "out.html"
    generate_file(
        "document",
        PARAMETERS,
        tmp_path / "tpl" / "page.jinja",
        output,
        [tmp_path / "layouts"],
        renderer_factory=_StubRenderer,
    )

    assert created == [([str(tmp_path / "tpl"), str(tmp_path / "layouts")], "page.jinja")]
    assert output.read_text(encoding="utf-8") == "document|page-title|tooltips"


def test_bundled_page_template_is_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out.html"

    generate_file("document", PARAMETERS, Path("page.html.j2"), output)

    text = output.read_text(encoding="utf-8")
    assert "<title>Guide</title>" in text
    assert "<p>BODY</p>" in text


def test_process_document_renders_existing_result(tmp_path: Path) -> None:
    template = tmp_path / "page.txt"
    template.write_text("== {page-title} ==\n{document}", encoding="utf-8")
    result = LiterateResult(content_tag="document", parameters=dict(PARAMETERS))

    path = process_document(result, tmp_path / "out.txt", LiterateOptions(template=template))

    assert path.read_text(encoding="utf-8") == "== Guide ==\n<p>BODY</p>"


def test_process_markdown_defaults_output_next_to_input(source_tree) -> None:
    source_tree.write({"guide.md": "# Guide\n\nSome *text*.\n"})

    path = process_markdown(source_tree.path("guide.md"))

    assert path == source_tree.path("guide.html")
    text = path.read_text(encoding="utf-8")
    assert '<h1 id="guide">Guide</h1>' in text
    assert "<em>text</em>" in text


def test_process_markdown_latex_output(source_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    source_tree.write({"guide.md": "# Guide\n"})
    calls: list[tuple[str, str, str]] = []

    def _convert_text(source: str, to: str, format: str) -> str:
        calls.append((source, to, format))
        return "\\section{Guide}\n"

    monkeypatch.setattr(markdown_provider.pypandoc, "convert_text", _convert_text)

    path = process_markdown(
        source_tree.path("guide.md"),
        options=LiterateOptions(output_format=OutputFormat.LATEX),
    )

    assert path == source_tree.path("guide.tex")
    assert path.read_text(encoding="utf-8") == "\\section{Guide}\n\n\n"
    assert calls == [("# Guide\n", "latex", "markdown")]


def test_process_script_with_template(source_tree, tmp_path: Path) -> None:
    source_tree.write(
        {
            "intro.py": """
            # %% [markdown]
            # # Intro
            # Prose here.

            # %%
            print("hello")
            """,
        }
    )
    template = tmp_path / "page.html"
    template.write_text("<title>{page-title}</title>{document}", encoding="utf-8")
    output = tmp_path / "intro.html"

    process_script(source_tree.path("intro.py"), output, LiterateOptions(template=template))

    text = output.read_text(encoding="utf-8")
    assert text.startswith("<title>Intro</title>")
    assert "Prose here." in text
    assert 'class="highlight"' in text


def test_process_directory_mirrors_tree(source_tree, tmp_path: Path) -> None:
    source_tree.write(
        {
            "index.md": "# Home\n",
            "guides/setup.md": "# Setup\n",
            "guides/walkthrough.py": "# %% [markdown]\n# # Walkthrough\n",
            "notes.txt": "ignored",
            ".hidden/secret.md": "# Secret\n",
        }
    )
    out_dir = tmp_path / "site"

    written = process_directory(source_tree.path(), out_dir)

    assert sorted(path.relative_to(out_dir).as_posix() for path in written) == [
        "guides/setup.html",
        "guides/walkthrough.html",
        "index.html",
    ]
    assert "Walkthrough" in (out_dir / "guides" / "walkthrough.html").read_text(encoding="utf-8")


def test_process_directory_non_recursive_defaults_to_input_dir(source_tree) -> None:
    source_tree.write({"index.md": "# Home\n", "guides/setup.md": "# Setup\n"})

    written = process_directory(source_tree.path(), options=LiterateOptions(recursive=False))

    assert written == [source_tree.path("index.html")]
    assert not source_tree.path("guides/setup.html").exists()


def test_process_directory_warns_when_sources_share_an_output(
    source_tree, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source_tree.write(
        {
            "guide.md": "# From markdown\n",
            "guide.py": "# %% [markdown]\n# # From script\n",
        }
    )
    out_dir = tmp_path / "site"

    with caplog.at_level(logging.WARNING, logger="docrender"):
        written = process_directory(source_tree.path(), out_dir)

    assert written == [out_dir / "guide.html"]
    page = (out_dir / "guide.html").read_text(encoding="utf-8")
    assert "From script" in page
    assert "From markdown" not in page
    (record,) = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert "guide.md and guide.py both render to" in record.getMessage()


def test_render_orchestration_is_exported_from_rendering_package() -> None:
    import docrender
    from docrender import rendering

    assert rendering.generate_file is generate_file
    assert docrender.generate_file is generate_file
    assert "generate_file" in rendering.__all__
