"""Application and module name validation.

The application name becomes the OTP application and the ``mix.exs`` app
atom, the module name becomes the root alias of every generated module.
Both are checked before anything touches the filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from graphism_new.errors import InvalidIdentifier, NameConflict
from graphism_new.scaffolder.assigns import camelize

_APP_RE = re.compile(r"[a-z][a-z0-9_]*", re.ASCII)
_MODULE_RE = re.compile(r"[A-Z]\w*(\.[A-Z]\w*)*", re.ASCII)


@dataclass(frozen=True)
class Identifiers:
    """Validated application and module names for one run."""

    app: str
    module: str
    app_inferred: bool = False


class NameRegistry(Protocol):
    """Answers whether a fully-qualified module name is already in use."""

    def is_taken(self, name: str) -> bool: ...


class InMemoryNameRegistry:
    """A ``NameRegistry`` backed by a fixed set of names."""

    def __init__(self, names: set[str] | frozenset[str] | None = None) -> None:
        self.names = frozenset(names or ())

    def is_taken(self, name: str) -> bool:
        return name in self.names


def validate_app(name: str, inferred: bool = False) -> str:
    """Return *name* if it is a valid application name.

    Raises:
        InvalidIdentifier: If *name* does not start with a lowercase ASCII
            letter followed by lowercase letters, digits or underscores.
    """
    if not _APP_RE.fullmatch(name):
        message = (
            "Application name must start with a lowercase ASCII letter, followed by "
            f"lowercase ASCII letters, numbers, or underscores, got: {name!r}"
        )
        if inferred:
            message += (
                ". The application name is inferred from the path, if you'd like to "
                'explicitly name the application then use the "--app APP" option'
            )
        raise InvalidIdentifier(message, name)
    return name


def validate_module(name: str) -> str:
    """Return *name* if it is a valid alias such as ``Foo.Bar``.

    Raises:
        InvalidIdentifier: If any dot-separated segment does not start with
            an uppercase ASCII letter.
    """
    if not _MODULE_RE.fullmatch(name):
        raise InvalidIdentifier(
            "Module name must be a valid Elixir alias (for example: Foo.Bar), "
            f"got: {name!r}",
            name,
        )
    return name


def check_module_available(name: str, registry: NameRegistry) -> None:
    """Raise ``NameConflict`` if *registry* already knows *name*."""
    if registry.is_taken(name):
        raise NameConflict(name)


def infer_app_name(path: str | Path) -> str:
    """Last segment of the expanded, absolute *path*."""
    return Path(path).expanduser().resolve().name


def resolve_identifiers(
    path: str | Path,
    registry: NameRegistry,
    app: str | None = None,
    module: str | None = None,
) -> Identifiers:
    """Apply defaults to the optional overrides and validate the result.

    The application name falls back to the last path segment and the module
    name to the camel-cased application name.  An override given as an
    empty string is validated like any other value.
    """
    inferred = app is None
    app_name = validate_app(infer_app_name(path) if inferred else app, inferred)
    module_name = validate_module(camelize(app_name) if module is None else module)
    check_module_available(module_name, registry)
    return Identifiers(app=app_name, module=module_name, app_inferred=inferred)
