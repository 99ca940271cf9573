"""Template assigns.

``Assigns`` is the closed set of values templates may reference.  Templates
are checked against its fields when they are compiled, so a template can
never ask for a value that does not exist.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, get_type_hints

from graphism_new.errors import VersionParseError
from graphism_new.scaffolder.styles import ordered, styles_label

if TYPE_CHECKING:
    from graphism_new.scaffolder.validation import Identifiers

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?",
    re.ASCII,
)


@dataclass(frozen=True)
class Assigns:
    """Values substituted into templates."""

    app: str
    mod: str
    mod_filename: str
    sup_app: str
    version: str
    has_graphql: bool
    has_rest: bool
    styles_label: str
    style_atoms: str
    port: int
    graphism_tag: str


def assign_types() -> dict[str, type]:
    """Map of assign name to its declared type."""
    hints = get_type_hints(Assigns)
    return {f.name: hints[f.name] for f in fields(Assigns)}


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_assigns(
    identifiers: Identifiers,
    styles: Iterable[str],
    runtime_version: str,
    *,
    port: int = 4001,
    graphism_tag: str = "v0.8.0",
) -> Assigns:
    """Build the template assigns for one generation run.

    Raises:
        VersionParseError: If *runtime_version* is not a semantic version.
    """
    enabled = ordered(styles)
    return Assigns(
        app=identifiers.app,
        mod=identifiers.module,
        mod_filename=underscore(identifiers.module),
        sup_app=sup_app(identifiers.module),
        version=parse_version(runtime_version),
        has_graphql="graphql" in enabled,
        has_rest="rest" in enabled,
        styles_label=styles_label(enabled),
        style_atoms="[" + ", ".join(f":{name}" for name in enabled) + "]",
        port=port,
        graphism_tag=graphism_tag,
    )


def sup_app(module: str) -> str:
    """Supervision entry appended to ``application/0`` in ``mix.exs``."""
    return f",\n      mod: {{{module}.Application, []}}"


def parse_version(version: str) -> str:
    """Reduce a semantic version to ``major.minor`` plus the first prerelease tag.

    Examples::

        parse_version("1.15.7")       -> "1.15"
        parse_version("1.16.0-rc.1")  -> "1.16-rc"
    """
    match = _SEMVER_RE.fullmatch(version.strip())
    if match is None:
        raise VersionParseError(version)
    result = f"{match['major']}.{match['minor']}"
    if match["pre"]:
        result += "-" + match["pre"].split(".")[0]
    return result


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def camelize(name: str) -> str:
    """Convert ``hello_world`` to ``HelloWorld``."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def underscore(module: str) -> str:
    """Convert ``Foo.HelloWorld`` to ``foo/hello_world``.

    Each alias segment becomes a path segment, camel-case boundaries become
    underscores and the result is lower-cased.
    """
    return "/".join(_snake_case(segment) for segment in module.split("."))


def _snake_case(value: str) -> str:
    s1 = re.sub(r"([^_])([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return s2.lower()
