"""Exception hierarchy for project generation.

Every failure that aborts a generation run derives from ``GenerationError``
so the CLI can report it as a single line and exit non-zero.  Filesystem
failures during emission are *not* wrapped: they surface as ``OSError``.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""


class InvalidIdentifier(GenerationError):
    """Raised when an application or module name has invalid syntax."""

    def __init__(self, message: str, name: str = "") -> None:
        self.name = name
        super().__init__(message)


class NameConflict(GenerationError):
    """Raised when the module name is already taken in the host runtime."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Module name {name} is already taken, please choose another name"
        )


class VersionParseError(GenerationError):
    """Raised when the host runtime version is not a semantic version."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Could not parse runtime version {version!r}")


class HostRuntimeError(GenerationError):
    """Raised when the host runtime cannot be queried at all."""


class UserAborted(GenerationError):
    """Raised when the user declines to write into an existing directory."""

    def __init__(self, message: str = "Please select another directory for installation") -> None:
        super().__init__(message)


class PathConflict(GenerationError):
    """Raised when a non-directory sits where a directory is required."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Cannot create directory {path!r}: a file is in the way")


class TemplateError(GenerationError):
    """Raised when a template uses syntax the engine does not support."""

    def __init__(self, message: str, template: str = "") -> None:
        self.template = template
        prefix = f"{template}: " if template else ""
        super().__init__(f"{prefix}{message}")


class UnknownAssignKey(TemplateError):
    """Raised when a template references a key that is not an assign."""

    def __init__(self, key: str, template: str = "") -> None:
        self.key = key
        super().__init__(f"unknown assign {key!r}", template)
