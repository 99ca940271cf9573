"""End-to-end tests for project generation.

These tests run the real generator, templates and local filesystem against
a temporary directory.  Only the host collaborators (module registry and
Elixir version) are replaced, so no Elixir installation is required.
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from graphism_new.scaffolder import ProjectGenerator, ProjectOptions
from graphism_new.scaffolder.emitter import always_yes
from graphism_new.scaffolder.validation import InMemoryNameRegistry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _generate(path: Path | str, **options) -> Path:
    generator = ProjectGenerator(
        registry=InMemoryNameRegistry(),
        runtime_version=lambda: "1.15.7",
        confirm=always_yes,
        quiet=True,
    )
    result = await generator.generate(ProjectOptions(path=str(path), **options))
    return Path(result.path)


def _tree(root: Path) -> dict[str, str]:
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestGeneratedProject:
    """Generated projects have the expected layout and content."""

    async def test_full_project_layout(self, tmp_path: Path) -> None:
        root = await _generate(tmp_path / "hello_world", graphql=True, rest=True)

        assert sorted(_tree(root)) == [
            ".formatter.exs",
            ".gitignore",
            "README.md",
            "config/config.exs",
            "config/runtime.exs",
            "lib/hello_world/application.ex",
            "lib/hello_world/auth.ex",
            "lib/hello_world/port.ex",
            "lib/hello_world/repo.ex",
            "lib/hello_world/router.ex",
            "lib/hello_world/schema.ex",
            "mix.exs",
            "test/hello_world/api_test.exs",
            "test/hello_world_test.exs",
            "test/test_helper.exs",
        ]

    async def test_modules_share_the_root_alias(self, tmp_path: Path) -> None:
        root = await _generate(tmp_path / "blog", module="Blog.Core", rest=True)

        for path in sorted((root / "lib" / "blog" / "core").glob("*.ex")):
            source = path.read_text(encoding="utf-8")
            match = re.search(r"^defmodule (\S+) do$", source, re.MULTILINE)
            assert match, f"{path.name} defines no module"
            assert match.group(1).startswith("Blog.Core."), path.name

    async def test_no_template_markers_left(self, tmp_path: Path) -> None:
        root = await _generate(tmp_path / "hello_world", graphql=True, rest=True)

        for name, content in _tree(root).items():
            assert "{{" not in content, name
            assert "{%" not in content, name

    async def test_rerun_is_stable(self, tmp_path: Path) -> None:
        target = tmp_path / "hello_world"
        await _generate(target, rest=True)
        first = _tree(target)
        await _generate(target, rest=True)
        assert _tree(target) == first

    async def test_style_switch_changes_only_style_files(self, tmp_path: Path) -> None:
        graphql = _tree(await _generate(tmp_path / "a" / "hello_world"))
        rest = _tree(await _generate(tmp_path / "b" / "hello_world", rest=True))

        changed = {name for name in graphql if graphql[name] != rest.get(name)}
        assert changed <= {
            "README.md",
            "lib/hello_world/router.ex",
            "lib/hello_world/schema.ex",
        }
        assert set(rest) - set(graphql) == {"test/hello_world/api_test.exs"}
