"""Main scaffolding orchestrator.

Takes ``ProjectOptions`` (a target path plus optional overrides) and
generates a Graphism project skeleton: validation, style resolution, assigns,
planning, confirmation and emission, in that order.  Everything up to and
including planning is free of filesystem writes, see ``prepare``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from graphism_new.config import GeneratorConfig
from graphism_new.errors import GenerationError
from graphism_new.scaffolder.assigns import Assigns, build_assigns
from graphism_new.scaffolder.emitter import (
    Confirm,
    EmittedFile,
    FileEmitter,
    LocalFileSystem,
    always_yes,
    prompt_confirm,
)
from graphism_new.scaffolder.host import HostNameRegistry, runtime_version_source
from graphism_new.scaffolder.plan import PlannedOutput, build_plan
from graphism_new.scaffolder.styles import resolve_styles
from graphism_new.scaffolder.templates import TemplateRenderer
from graphism_new.scaffolder.validation import Identifiers, NameRegistry, resolve_identifiers


# ---------------------------------------------------------------------------
# Input / output models
# ---------------------------------------------------------------------------


class ProjectOptions(BaseModel):
    """What the user asked for on the command line."""

    path: str = Field(..., min_length=1, description="Target directory")
    app: str | None = Field(default=None, description="Application name override")
    module: str | None = Field(default=None, description="Module name override")
    graphql: bool = Field(default=False, description="Enable the GraphQL style")
    rest: bool = Field(default=False, description="Enable the REST style")

    def style_flags(self) -> dict[str, bool]:
        return {"graphql": self.graphql, "rest": self.rest}


class RunState(str, Enum):
    VALIDATING = "validating"
    RESOLVING = "resolving"
    BUILDING_ASSIGNS = "building_assigns"
    PLANNING = "planning"
    CONFIRMING = "confirming"
    EMITTING = "emitting"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class PreparedProject:
    """The result of every stage before emission."""

    path: str
    identifiers: Identifiers
    styles: frozenset[str]
    assigns: Assigns
    plan: list[PlannedOutput]


@dataclass
class GenerationResult:
    project: PreparedProject
    files: list[EmittedFile] = field(default_factory=list)

    @property
    def path(self) -> str:
        return self.project.path


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generates a new Graphism project.

    Every collaborator with an outside effect is injectable: the module
    name registry, the runtime version source, the confirmation prompt and
    the filesystem.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        registry: NameRegistry | None = None,
        runtime_version: Callable[[], str] | None = None,
        confirm: Confirm | None = None,
        filesystem: LocalFileSystem | None = None,
        renderer: TemplateRenderer | None = None,
        quiet: bool = False,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.registry = registry or HostNameRegistry(
            self.config.elixir_executable, timeout=self.config.command_timeout
        )
        self.runtime_version = runtime_version or runtime_version_source(
            self.config.elixir_version,
            self.config.elixir_executable,
            self.config.command_timeout,
        )
        if confirm is None:
            confirm = always_yes if self.config.assume_yes else prompt_confirm
        self.renderer = renderer or TemplateRenderer()
        self.emitter = FileEmitter(filesystem, confirm, quiet=quiet)
        self.state = RunState.VALIDATING

    # -- Public API --------------------------------------------------------

    def prepare(self, options: ProjectOptions) -> PreparedProject:
        """Run validation, style resolution, assigns and planning.

        Nothing is written to disk.

        Raises:
            GenerationError: If any stage fails; ``state`` is then ``ABORTED``.
        """
        try:
            self.state = RunState.VALIDATING
            identifiers = resolve_identifiers(
                options.path, self.registry, app=options.app, module=options.module
            )

            self.state = RunState.RESOLVING
            styles = resolve_styles(options.style_flags(), self.config.default_style)

            self.state = RunState.BUILDING_ASSIGNS
            assigns = build_assigns(
                identifiers,
                styles,
                self.runtime_version(),
                port=self.config.port,
                graphism_tag=self.config.graphism_tag,
            )

            self.state = RunState.PLANNING
            plan = build_plan(assigns, self.renderer)
        except GenerationError:
            self.state = RunState.ABORTED
            raise

        return PreparedProject(
            path=options.path,
            identifiers=identifiers,
            styles=styles,
            assigns=assigns,
            plan=plan,
        )

    async def generate(self, options: ProjectOptions) -> GenerationResult:
        """Prepare the project and write it to ``options.path``.

        Raises:
            GenerationError: On validation, confirmation or path conflicts.
            OSError: If a write fails; earlier files stay on disk.
        """
        project = self.prepare(options)
        target = Path(project.path)
        try:
            self.state = RunState.CONFIRMING
            self.emitter.check_target(target)

            self.state = RunState.EMITTING
            files = await self.emitter.write(project.plan, target)
        except (GenerationError, OSError):
            self.state = RunState.ABORTED
            raise

        self.state = RunState.DONE
        return GenerationResult(project=project, files=files)


# ---------------------------------------------------------------------------
# Post-generation summary
# ---------------------------------------------------------------------------


def summary(result: GenerationResult) -> str:
    """Next steps for the freshly generated project."""
    assigns = result.project.assigns
    cd = "" if result.path == "." else f"cd {result.path}\n    "
    lines = [
        "Your Graphism project was created successfully.",
        "",
        'You can use "mix" to compile it:',
        "",
        f"    {cd}mix deps.get",
        "    mix compile",
        "",
        "Then initialise your database:",
        "",
        "    mix graphism.migrations",
        "    mix ecto.create",
        "    mix ecto.migrate",
        "",
        'Finally, you can test with "mix test".',
        "",
        'Run "mix help" for more commands.',
        "",
        'To start your project: "iex -S mix".',
        "",
    ]
    if assigns.has_graphql:
        lines.append(f"Check the GraphiQL UI at http://localhost:{assigns.port}/graphiql.")
    if assigns.has_rest:
        lines.append(
            f"Documentation for your REST Api is at http://localhost:{assigns.port}/doc."
        )
    return "\n".join(lines)
