"""Command line entry point.

Usage::

    graphism-new hello_world
    graphism-new hello_world --module HelloWorld --rest
    graphism-new . --app shop --module Shop --graphql --rest
"""

from __future__ import annotations

import asyncio
import sys

from graphism_new.config import GeneratorConfig
from graphism_new.errors import GenerationError
from graphism_new.scaffolder.generator import ProjectGenerator, ProjectOptions, summary
from graphism_new.utils import console, print_error, print_panel, print_success


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``graphism-new`` and ``python -m graphism_new``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="graphism-new",
        description="Create a new Graphism project at PATH",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "The application and module names are inferred from PATH unless\n"
            "--app or --module is given.\n\n"
            "Examples:\n"
            "  graphism-new hello_world\n"
            "  graphism-new hello_world --module HelloWorld --rest\n"
            "  graphism-new . --app shop --module Shop --graphql --rest\n"
        ),
    )
    parser.add_argument("path", nargs="?", help="Directory of the new project")
    parser.add_argument("--app", default=None, help="Name of the OTP application")
    parser.add_argument("--module", default=None, help="Root module name of the generated code")
    parser.add_argument("--graphql", action="store_true", help="Expose the schema over GraphQL")
    parser.add_argument("--rest", action="store_true", help="Expose the schema over REST")
    parser.add_argument("--port", type=int, default=None, help="HTTP port (default: 4001)")
    parser.add_argument(
        "--elixir-version",
        default=None,
        help="Elixir version to target instead of asking the local elixir",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask before writing into a non-empty directory",
    )

    args = parser.parse_args(argv)

    if not args.path:
        print_error('Expected PATH to be given, please use "graphism-new PATH"')
        sys.exit(1)

    try:
        config = GeneratorConfig.from_env()
        overrides = {
            key: value
            for key, value in (
                ("port", args.port),
                ("elixir_version", args.elixir_version),
                ("assume_yes", True if args.yes else None),
            )
            if value is not None
        }
        if overrides:
            config = GeneratorConfig(**{**config.model_dump(), **overrides})
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    options = ProjectOptions(
        path=args.path,
        app=args.app,
        module=args.module,
        graphql=args.graphql,
        rest=args.rest,
    )
    generator = ProjectGenerator(config)

    try:
        result = asyncio.run(generator.generate(options))
    except (GenerationError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)

    print_success(f"Generated {len(result.files)} files in {result.path}")
    print_panel(summary(result), title=result.project.identifiers.module)
    console.print()


if __name__ == "__main__":
    main()
