"""graphism-new configuration.

Typed settings for the generator.  All settings use a Pydantic v2 model so
they are validated at construction time and can be read from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``ProjectGenerator``.
    """

    default_style: str = Field(
        default="graphql",
        description="Style enabled when no style flag is given",
    )
    port: int = Field(
        default=4001, ge=1, le=65535, description="HTTP port of the generated service"
    )
    elixir_executable: str = Field(default="elixir")
    elixir_version: str | None = Field(
        default=None,
        description="Use this version instead of asking the elixir executable",
    )
    graphism_tag: str = Field(default="v0.8.0", min_length=1)
    assume_yes: bool = Field(
        default=False, description="Write into non-empty directories without asking"
    )
    command_timeout: int = Field(
        default=30, ge=1, description="Timeout in seconds for elixir queries"
    )

    @field_validator("default_style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        from graphism_new.scaffolder.styles import STYLES

        if value not in STYLES:
            raise ValueError(f"unknown style {value!r}, expected one of {', '.join(STYLES)}")
        return value

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            GRAPHISM_NEW_DEFAULT_STYLE, GRAPHISM_NEW_PORT, GRAPHISM_NEW_ELIXIR,
            GRAPHISM_NEW_ELIXIR_VERSION, GRAPHISM_NEW_GRAPHISM_TAG,
            GRAPHISM_NEW_ASSUME_YES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GRAPHISM_NEW_DEFAULT_STYLE"):
            kwargs["default_style"] = os.environ["GRAPHISM_NEW_DEFAULT_STYLE"]
        if os.environ.get("GRAPHISM_NEW_PORT"):
            kwargs["port"] = int(os.environ["GRAPHISM_NEW_PORT"])
        if os.environ.get("GRAPHISM_NEW_ELIXIR"):
            kwargs["elixir_executable"] = os.environ["GRAPHISM_NEW_ELIXIR"]
        if os.environ.get("GRAPHISM_NEW_ELIXIR_VERSION"):
            kwargs["elixir_version"] = os.environ["GRAPHISM_NEW_ELIXIR_VERSION"]
        if os.environ.get("GRAPHISM_NEW_GRAPHISM_TAG"):
            kwargs["graphism_tag"] = os.environ["GRAPHISM_NEW_GRAPHISM_TAG"]
        if os.environ.get("GRAPHISM_NEW_ASSUME_YES"):
            kwargs["assume_yes"] = os.environ["GRAPHISM_NEW_ASSUME_YES"].strip().lower() in _TRUTHY
        return cls(**kwargs)
