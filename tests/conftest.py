from __future__ import annotations

import logging
import sys
import textwrap
from pathlib import Path
from typing import Iterator, Mapping

import pytest


class SourceTree:
    """Writes source documents into a throwaway directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries under the root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTree:
    """Provide a source tree rooted at the pytest tmp_path."""
    return SourceTree(tmp_path / "docs")


@pytest.fixture(autouse=True)
def _restore_docrender_logger() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI and logging tests."""
    logger = logging.getLogger("docrender")
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]


SAMPLE_MODULE = '''
"""Sample module.

Used to exercise API collection.
"""


def greet(name: str) -> str:
    """Return a greeting for *name*."""
    return f"hi {name}"


def _hidden() -> None:
    pass


class Greeter:
    """Greets people by name."""

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    def title(self) -> str:
        """Display title."""
        return self.name.title()

    @classmethod
    def default(cls) -> "Greeter":
        """Return a greeter for the world."""
        return cls("world")

    def _secret(self) -> None:
        pass
'''


@pytest.fixture
def sample_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Write an importable module and return its name."""
    name = "docrender_sample_api"
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    (source_dir / f"{name}.py").write_text(SAMPLE_MODULE.lstrip("\n"), encoding="utf-8")
    monkeypatch.syspath_prepend(str(source_dir))
    sys.modules.pop(name, None)
    yield name
    sys.modules.pop(name, None)
