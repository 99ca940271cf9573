"""Shared pytest fixtures for the graphism-new test suite.

Provides reusable fixtures for:
- Pre-built identifiers and assigns for each style combination
- A template renderer over the packaged templates
- A recording filesystem that tracks every mutation
- A generator factory with all host collaborators replaced
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from graphism_new.config import GeneratorConfig
from graphism_new.scaffolder.assigns import Assigns, build_assigns
from graphism_new.scaffolder.emitter import LocalFileSystem, always_yes
from graphism_new.scaffolder.generator import ProjectGenerator
from graphism_new.scaffolder.templates import TemplateRenderer
from graphism_new.scaffolder.validation import Identifiers, InMemoryNameRegistry

ELIXIR_VERSION = "1.15.7"


# ---------------------------------------------------------------------------
# Assigns
# ---------------------------------------------------------------------------


@pytest.fixture
def identifiers() -> Identifiers:
    return Identifiers(app="hello_world", module="HelloWorld", app_inferred=True)


@pytest.fixture
def graphql_assigns(identifiers) -> Assigns:
    """Assigns for the default style set."""
    return build_assigns(identifiers, {"graphql"}, ELIXIR_VERSION)


@pytest.fixture
def rest_assigns(identifiers) -> Assigns:
    """Assigns with only the REST style enabled."""
    return build_assigns(identifiers, {"rest"}, ELIXIR_VERSION)


@pytest.fixture
def full_assigns(identifiers) -> Assigns:
    """Assigns with every style enabled."""
    return build_assigns(identifiers, {"graphql", "rest"}, ELIXIR_VERSION)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class RecordingFileSystem(LocalFileSystem):
    """A real filesystem that also records every mutating call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []

    def make_dirs(self, path: Path) -> None:
        self.calls.append(("make_dirs", path))
        super().make_dirs(path)

    def write_text(self, path: Path, content: str) -> None:
        self.calls.append(("write_text", path))
        super().write_text(path, content)

    @property
    def created_dirs(self) -> list[Path]:
        return [path for op, path in self.calls if op == "make_dirs"]

    @property
    def written(self) -> list[Path]:
        return [path for op, path in self.calls if op == "write_text"]


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


@pytest.fixture
def make_generator(recording_fs) -> Callable[..., ProjectGenerator]:
    """Factory for a ``ProjectGenerator`` that never talks to the host.

    Keyword arguments:
        taken: module names the registry reports as already loaded.
        confirm: confirmation callable (default: always yes).
        version: runtime version string (default: ``1.15.7``).
        config: a ``GeneratorConfig`` (default: defaults).
    """

    def _factory(
        taken: tuple[str, ...] = (),
        confirm: Callable[[str], bool] = always_yes,
        version: str = ELIXIR_VERSION,
        config: GeneratorConfig | None = None,
        **kwargs: Any,
    ) -> ProjectGenerator:
        return ProjectGenerator(
            config or GeneratorConfig(),
            registry=InMemoryNameRegistry(set(taken)),
            runtime_version=lambda: version,
            confirm=confirm,
            filesystem=recording_fs,
            quiet=True,
            **kwargs,
        )

    return _factory


def snapshot(root: Path) -> dict[str, str]:
    """Relative path -> content for every file under *root*."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, str]]:
    return snapshot
