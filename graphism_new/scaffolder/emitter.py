"""Writing a resolved generation plan to disk.

The emitter is the only part of the generator with side effects.  Before
the first write it checks the target directory and, when the target already
has content, asks for confirmation.  Writes are not transactional: a failure
part-way through leaves the files written so far in place.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from graphism_new.errors import PathConflict, UserAborted
from graphism_new.scaffolder.plan import PlannedOutput
from graphism_new.utils import console, print_created

Confirm = Callable[[str], bool]


# ---------------------------------------------------------------------------
# Confirmation collaborators
# ---------------------------------------------------------------------------


def always_yes(message: str) -> bool:
    return True


def always_no(message: str) -> bool:
    return False


def prompt_confirm(message: str) -> bool:
    """Ask on the terminal.  End of input or Ctrl+C counts as "no"."""
    from rich.prompt import Confirm as RichConfirm

    try:
        return RichConfirm.ask(message, console=console, default=False)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return False


# ---------------------------------------------------------------------------
# Filesystem collaborator
# ---------------------------------------------------------------------------


class LocalFileSystem:
    """The filesystem primitives the emitter depends on."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_empty_dir(self, path: Path) -> bool:
        return not any(path.iterdir())

    def is_cwd(self, path: Path) -> bool:
        return is_current_dir(path)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# FileEmitter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmittedFile:
    path: Path
    action: str


class FileEmitter:
    """Applies a list of ``PlannedOutput`` to a target directory."""

    def __init__(
        self,
        filesystem: LocalFileSystem | None = None,
        confirm: Confirm = prompt_confirm,
        *,
        quiet: bool = False,
    ) -> None:
        self.fs = filesystem or LocalFileSystem()
        self.confirm = confirm
        self.quiet = quiet

    # -- Public API --------------------------------------------------------

    def check_target(self, target: Path) -> None:
        """Validate *target* and obtain confirmation if it has content.

        Raises:
            PathConflict: If *target* exists and is not a directory.
            UserAborted: If confirmation was required and declined.
        """
        if not self.fs.exists(target):
            return
        if not self.fs.is_dir(target):
            raise PathConflict(str(target))
        if self.fs.is_cwd(target) or self.fs.is_empty_dir(target):
            return
        message = f"The directory {str(target)!r} already exists. Are you sure you want to continue?"
        if not self.confirm(message):
            raise UserAborted()

    async def emit(self, plan: list[PlannedOutput], target: str | Path) -> list[EmittedFile]:
        """Check *target*, then write *plan* under it."""
        self.check_target(Path(target))
        return await self.write(plan, target)

    async def write(self, plan: list[PlannedOutput], target: str | Path) -> list[EmittedFile]:
        """Write *plan* under *target* without any confirmation.

        The target directory is created unless it is the current working
        directory.  ``OSError`` from the filesystem propagates unchanged.

        Returns:
            One ``EmittedFile`` per planned file, in plan order.
        """
        root = Path(target)
        if not self.fs.is_cwd(root):
            await self._ensure_dir(root)

        emitted: list[EmittedFile] = []
        for item in plan:
            path = root / item.path
            if item.is_dir:
                await self._ensure_dir(path)
                continue
            await self._ensure_dir(path.parent)
            action = "overwriting" if await asyncio.to_thread(self.fs.exists, path) else "creating"
            await asyncio.to_thread(self.fs.write_text, path, item.content)
            self._report(item.path, action)
            emitted.append(EmittedFile(path, action))
        return emitted

    # -- Internal helpers --------------------------------------------------

    async def _ensure_dir(self, path: Path) -> None:
        """Create *path* and its parents; a no-op when it already exists."""
        if await asyncio.to_thread(self.fs.exists, path):
            if not await asyncio.to_thread(self.fs.is_dir, path):
                raise PathConflict(str(path))
            return
        try:
            await asyncio.to_thread(self.fs.make_dirs, path)
        except (FileExistsError, NotADirectoryError) as exc:
            raise PathConflict(str(path)) from exc

    def _report(self, path: str, action: str) -> None:
        if not self.quiet:
            print_created(path, action)


def is_current_dir(path: Path) -> bool:
    """True if *path* names the process working directory."""
    return str(path) == "." or path.resolve() == Path.cwd().resolve()
