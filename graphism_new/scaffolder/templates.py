"""Template compilation and rendering for project scaffolding.

Templates are written in a small subset of Jinja2 syntax:

* ``{{ key }}`` interpolates an assign,
* ``{% if key %}`` / ``{% if not key %}`` with optional ``{% elif %}`` and
  ``{% else %}`` includes a region depending on a boolean assign,
* ``{# ... #}`` comments are dropped.

Each template is parsed once with the Jinja2 parser and converted into a
tuple of typed nodes (``Literal``, ``Interpolate``, ``If``).  Every key is
checked against the fields of ``Assigns`` at that point, so rendering itself
cannot fail.  Anything else Jinja2 understands (filters, loops, attribute
access, ...) is rejected with ``TemplateError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Union

from jinja2 import Environment, FileSystemLoader, nodes
from jinja2.exceptions import TemplateNotFound, TemplateSyntaxError

from graphism_new.errors import TemplateError, UnknownAssignKey
from graphism_new.scaffolder.assigns import Assigns, assign_types


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def _make_environment(template_dir: Path | None = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)) if template_dir else None,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Interpolate:
    key: str


@dataclass(frozen=True)
class If:
    key: str
    then: tuple["Node", ...]
    otherwise: tuple["Node", ...] = ()


Node = Union[Literal, Interpolate, If]


@dataclass(frozen=True)
class Template:
    """A compiled template, safe to render any number of times."""

    name: str
    nodes: tuple[Node, ...]

    def render(self, assigns: Assigns) -> str:
        parts: list[str] = []
        _evaluate(self.nodes, assigns, parts)
        return "".join(parts)


def _evaluate(body: tuple[Node, ...], assigns: Assigns, out: list[str]) -> None:
    for node in body:
        if isinstance(node, Literal):
            out.append(node.text)
        elif isinstance(node, Interpolate):
            out.append(str(getattr(assigns, node.key)))
        elif getattr(assigns, node.key):
            _evaluate(node.then, assigns, out)
        else:
            _evaluate(node.otherwise, assigns, out)


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def compile_template(
    source: str,
    name: str = "<string>",
    env: Environment | None = None,
    filename: str | None = None,
) -> Template:
    """Parse *source* and check every referenced key against ``Assigns``.

    Raises:
        TemplateError: On a syntax error or an unsupported construct.
        UnknownAssignKey: If a key is not an ``Assigns`` field.
    """
    env = env or _make_environment()
    try:
        tree = env.parse(source, name, filename)
    except TemplateSyntaxError as exc:
        raise TemplateError(f"line {exc.lineno}: {exc.message}", name) from exc
    return Template(name=name, nodes=_Compiler(name).body(tree.body))


class _Compiler:
    def __init__(self, name: str) -> None:
        self.name = name
        self.types = assign_types()

    def body(self, body: list[nodes.Node]) -> tuple[Node, ...]:
        out: list[Node] = []
        for node in body:
            if isinstance(node, nodes.Output):
                out.extend(self.output(child) for child in node.nodes)
            elif isinstance(node, nodes.If):
                out.append(self.if_chain(node))
            else:
                self.unsupported(node)
        return _merge_literals(out)

    def output(self, node: nodes.Expr) -> Node:
        if isinstance(node, nodes.TemplateData):
            return Literal(node.data)
        if isinstance(node, nodes.Name):
            return Interpolate(self.key(node.name))
        self.unsupported(node)

    def if_chain(self, node: nodes.If) -> If:
        otherwise = self.body(node.else_)
        for branch in reversed(node.elif_):
            otherwise = (self.branch(branch.test, branch.body, otherwise),)
        return self.branch(node.test, node.body, otherwise)

    def branch(
        self, test: nodes.Expr, body: list[nodes.Node], otherwise: tuple[Node, ...]
    ) -> If:
        negated = isinstance(test, nodes.Not)
        if negated:
            test = test.node
        if not isinstance(test, nodes.Name):
            self.unsupported(test)
        key = self.key(test.name)
        if self.types[key] is not bool:
            raise TemplateError(f"condition {key!r} is not a boolean assign", self.name)
        then = self.body(body)
        if negated:
            return If(key, otherwise, then)
        return If(key, then, otherwise)

    def key(self, key: str) -> str:
        if key not in self.types:
            raise UnknownAssignKey(key, self.name)
        return key

    def unsupported(self, node: nodes.Node) -> NoReturn:
        raise TemplateError(
            f"line {node.lineno}: unsupported {type(node).__name__} node", self.name
        )


def _merge_literals(body: list[Node]) -> tuple[Node, ...]:
    merged: list[Node] = []
    for node in body:
        if isinstance(node, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + node.text)
        else:
            merged.append(node)
    return tuple(merged)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Loads, compiles and renders the scaffolding templates.

    Templates are ``.j2`` files under a configurable template directory.
    Each one is compiled on first use and cached for the life of the
    renderer.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = _make_environment(self.template_dir)
        self._compiled: dict[str, Template] = {}

    def get_template(self, name: str) -> Template:
        """Return the compiled template *name* (relative to the template dir)."""
        if name not in self._compiled:
            try:
                source, filename, _ = self.env.loader.get_source(self.env, name)
            except TemplateNotFound as exc:
                raise TemplateError("template not found", name) from exc
            self._compiled[name] = compile_template(source, name, self.env, filename)
        return self._compiled[name]

    def render(self, name: str, assigns: Assigns) -> str:
        """Render the template *name* with *assigns*."""
        return self.get_template(name).render(assigns)

    def render_string(self, source: str, assigns: Assigns) -> str:
        """Compile and render an inline template string.

        Used for small fragments that are not stored as files, such as the
        output paths of the generation plan.
        """
        return compile_template(source, "<string>", self.env).render(assigns)

    def load_all(self) -> dict[str, Template]:
        """Compile every template up front and return them by name."""
        return {name: self.get_template(name) for name in self.list_templates()}

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template names."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in self.template_dir.rglob("*.j2")
        )
