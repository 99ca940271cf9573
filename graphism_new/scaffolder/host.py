"""Queries against the local Elixir toolchain.

The generator asks the host for two things: the Elixir version (pinned in
the generated ``mix.exs``) and whether a module name is already taken.
Both are injectable in ``ProjectGenerator`` so tests never need Elixir.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from graphism_new.errors import HostRuntimeError
from graphism_new.utils import print_warning, run_command

_ELIXIR_VERSION_RE = re.compile(r"^Elixir (\S+)", re.MULTILINE)

# Modules of the Elixir standard library and of the generated project's
# dependency stack.  A project named after one of them cannot compile.
RESERVED_MODULES: frozenset[str] = frozenset({
    "Access", "Agent", "Application", "Atom", "Base", "Bitwise", "Calendar",
    "Code", "Config", "Date", "DateTime", "Dict", "DynamicSupervisor", "Elixir",
    "Enum", "Exception", "File", "Float", "Function", "GenEvent", "GenServer",
    "HashDict", "HashSet", "IO", "Inspect", "Integer", "Kernel", "Keyword",
    "List", "Logger", "Macro", "Map", "MapSet", "Mix", "Module", "NaiveDateTime",
    "Node", "OptionParser", "Path", "Port", "Process", "Protocol", "Range",
    "Record", "Regex", "Registry", "Set", "Stream", "String", "StringIO",
    "Supervisor", "System", "Task", "Time", "Tuple", "URI", "Version",
    "Absinthe", "Ecto", "Graphism", "Jason", "Plug", "Postgrex", "Telemetry",
})


def elixir_version(executable: str = "elixir", timeout: int = 30) -> str:
    """Return the raw version reported by ``elixir --version``.

    Raises:
        HostRuntimeError: If the executable is missing, fails, or its output
            does not mention an Elixir version.
    """
    try:
        returncode, stdout, stderr = run_command([executable, "--version"], timeout=timeout)
    except FileNotFoundError as exc:
        raise HostRuntimeError(
            f"{executable!r} was not found; install Elixir or pass --elixir-version"
        ) from exc
    if returncode != 0:
        raise HostRuntimeError(
            f"'{executable} --version' failed (exit {returncode}): {stderr}"
        )
    match = _ELIXIR_VERSION_RE.search(stdout)
    if match is None:
        raise HostRuntimeError(f"Could not find the Elixir version in: {stdout!r}")
    return match.group(1)


def runtime_version_source(
    override: str | None, executable: str = "elixir", timeout: int = 30
) -> Callable[[], str]:
    """Return a callable producing the runtime version for ``build_assigns``."""
    if override:
        return lambda: override
    return lambda: elixir_version(executable, timeout)


class HostNameRegistry:
    """``NameRegistry`` backed by the reserved names and the local Elixir.

    The check is best effort: when ``elixir`` is unavailable only the
    reserved names are consulted and a warning is printed.
    """

    def __init__(
        self,
        executable: str = "elixir",
        reserved: frozenset[str] = RESERVED_MODULES,
        timeout: int = 30,
    ) -> None:
        self.executable = executable
        self.reserved = reserved
        self.timeout = timeout

    def is_taken(self, name: str) -> bool:
        if name in self.reserved:
            return True
        script = f"IO.puts(Code.ensure_loaded?(Elixir.{name}))"
        try:
            returncode, stdout, _ = run_command(
                [self.executable, "-e", script], timeout=self.timeout
            )
        except FileNotFoundError:
            print_warning(
                f"{self.executable!r} was not found, only reserved module names were checked"
            )
            return False
        return returncode == 0 and stdout.splitlines()[-1:] == ["true"]
