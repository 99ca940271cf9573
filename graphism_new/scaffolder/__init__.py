"""graphism-new scaffolder -- generates new Graphism project skeletons.

This package takes a target path plus optional overrides and renders a
Graphism (Elixir) backend-service project: a Mix project with an Ecto repo,
a Plug router and a schema exposed over GraphQL, REST, or both.

Quick usage::

    from graphism_new.scaffolder import ProjectGenerator, ProjectOptions

    generator = ProjectGenerator()
    result = await generator.generate(ProjectOptions(path="hello_world", rest=True))
"""

from graphism_new.scaffolder.generator import (
    GenerationResult,
    PreparedProject,
    ProjectGenerator,
    ProjectOptions,
    RunState,
    summary,
)
from graphism_new.scaffolder.templates import TemplateRenderer

__all__ = [
    "GenerationResult",
    "PreparedProject",
    "ProjectGenerator",
    "ProjectOptions",
    "RunState",
    "TemplateRenderer",
    "summary",
]
