"""The generation plan.

``PLAN`` is the static table of everything a new project may contain.
``build_plan`` turns it into the concrete list of directories and rendered
files for one set of assigns, without touching the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphism_new.scaffolder.assigns import Assigns
from graphism_new.scaffolder.templates import TemplateRenderer


@dataclass(frozen=True)
class PlanEntry:
    """One row of the plan table.

    ``path`` is itself a template (it may embed ``{{ mod_filename }}``).
    ``template`` is ``None`` for a directory.  ``when`` names the boolean
    assign that must be true for the entry to be included.
    """

    path: str
    template: str | None = None
    when: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.template is None

    def include(self, assigns: Assigns) -> bool:
        return self.when is None or bool(getattr(assigns, self.when))


@dataclass(frozen=True)
class PlannedOutput:
    """A resolved entry: a directory (``content is None``) or a file."""

    path: str
    content: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.content is None


# Directories precede the files nested under them.
PLAN: tuple[PlanEntry, ...] = (
    PlanEntry("README.md", "readme.md.j2"),
    PlanEntry(".formatter.exs", "formatter.exs.j2"),
    PlanEntry(".gitignore", "gitignore.j2"),
    PlanEntry("mix.exs", "mix.exs.j2"),
    PlanEntry("config"),
    PlanEntry("config/config.exs", "config.exs.j2"),
    PlanEntry("config/runtime.exs", "runtime.exs.j2"),
    PlanEntry("lib"),
    PlanEntry("lib/{{ mod_filename }}/application.ex", "application.ex.j2"),
    PlanEntry("lib/{{ mod_filename }}/repo.ex", "repo.ex.j2"),
    PlanEntry("lib/{{ mod_filename }}/auth.ex", "auth.ex.j2"),
    PlanEntry("lib/{{ mod_filename }}/port.ex", "port.ex.j2"),
    PlanEntry("lib/{{ mod_filename }}/router.ex", "router.ex.j2"),
    PlanEntry("lib/{{ mod_filename }}/schema.ex", "schema.ex.j2"),
    PlanEntry("test"),
    PlanEntry("test/test_helper.exs", "test_helper.exs.j2"),
    PlanEntry("test/{{ mod_filename }}_test.exs", "module_test.exs.j2"),
    PlanEntry("test/{{ mod_filename }}/api_test.exs", "api_test.exs.j2", when="has_rest"),
)


def build_plan(
    assigns: Assigns,
    renderer: TemplateRenderer,
    entries: tuple[PlanEntry, ...] = PLAN,
) -> list[PlannedOutput]:
    """Resolve *entries* against *assigns*.

    Every predicate is evaluated and every included template rendered, so
    the returned list is exactly what emission will write.
    """
    planned: list[PlannedOutput] = []
    for entry in entries:
        if not entry.include(assigns):
            continue
        path = renderer.render_string(entry.path, assigns)
        if entry.is_dir:
            planned.append(PlannedOutput(path))
        else:
            planned.append(PlannedOutput(path, renderer.render(entry.template, assigns)))
    return planned
