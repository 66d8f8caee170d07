"""Resolution of conflicts between generated files and existing ones.

Every generated file goes through ``ConflictResolver.resolve``.  Files that do
not exist yet are created, byte-identical files are left alone, and files with
different content are overwritten or skipped according to the strategy --
asking the user per file in the default ``ask`` strategy.
"""

from __future__ import annotations

import asyncio
import difflib
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.prompt import Prompt
from rich.syntax import Syntax

from oghliner.config import ConflictStrategy
from oghliner.errors import ConflictAborted, GenerationError, PromptError
from oghliner.utils import console as default_console


class ConflictDecision(str, Enum):
    """Outcome of resolving a single file."""

    CREATE = "create"
    IDENTICAL = "identical"
    OVERWRITE = "overwrite"
    SKIP = "skip"

    @property
    def writes(self) -> bool:
        """Whether the generated content must be written to disk."""
        return self in (ConflictDecision.CREATE, ConflictDecision.OVERWRITE)


_CHOICES = ["y", "n", "a", "d", "q"]

_HELP = (
    "  [bold]y[/bold] overwrite  [bold]n[/bold] skip  "
    "[bold]a[/bold] overwrite this and all others  "
    "[bold]d[/bold] show the differences  [bold]q[/bold] abort"
)


class ConflictResolver:
    """Decides what happens to generated files that already exist under *root_dir*.

    *stdin* is only checked with ``isatty()`` before asking; answers are
    read by Rich from the console's own input.
    """

    def __init__(
        self,
        root_dir: str | Path,
        strategy: ConflictStrategy = "ask",
        console: Console | None = None,
        stdin: TextIO | None = None,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.strategy = strategy
        self.console = console or default_console
        self.stdin = stdin if stdin is not None else sys.stdin
        self.overwrite_all = False

    async def resolve(self, relative_path: str | Path, content: bytes) -> ConflictDecision:
        """Resolve *relative_path* against the file currently on disk."""
        target = self.root_dir / relative_path
        if not target.exists():
            return ConflictDecision.CREATE

        try:
            existing = await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            raise GenerationError(relative_path, f"cannot read existing file: {exc}") from exc
        if existing == content:
            return ConflictDecision.IDENTICAL

        if self.strategy == "overwrite" or self.overwrite_all:
            return ConflictDecision.OVERWRITE
        if self.strategy == "skip":
            return ConflictDecision.SKIP
        return await self._ask(str(relative_path), existing, content)

    async def _ask(self, path: str, existing: bytes, content: bytes) -> ConflictDecision:
        isatty = getattr(self.stdin, "isatty", None)
        if not (isatty and isatty()):
            raise PromptError(
                f"{path} already exists and stdin is not a terminal; "
                "choose a conflict strategy (overwrite or skip) explicitly."
            )

        while True:
            self.console.print(f"[bold yellow]Conflict[/bold yellow] on {path}")
            self.console.print(_HELP)
            try:
                answer = await asyncio.to_thread(
                    Prompt.ask,
                    f"Replace {path}?",
                    choices=_CHOICES,
                    default="n",
                    console=self.console,
                )
            except (EOFError, KeyboardInterrupt) as exc:
                raise PromptError(f"Prompt interrupted while resolving {path}") from exc

            if answer == "y":
                return ConflictDecision.OVERWRITE
            if answer == "n":
                return ConflictDecision.SKIP
            if answer == "a":
                self.overwrite_all = True
                return ConflictDecision.OVERWRITE
            if answer == "q":
                raise ConflictAborted(path)
            self.show_diff(path, existing, content)

    def show_diff(self, path: str, existing: bytes, content: bytes) -> None:
        """Print a unified diff between the file on disk and the generated one."""
        diff = unified_diff(path, existing, content)
        if not diff:
            self.console.print("[dim]Files differ only in binary content.[/dim]")
            return
        self.console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


def unified_diff(path: str, existing: bytes, content: bytes) -> str:
    """Return a unified diff of two text files, or ``""`` for binary content."""
    try:
        old = existing.decode("utf-8").splitlines(keepends=True)
        new = content.decode("utf-8").splitlines(keepends=True)
    except UnicodeDecodeError:
        return ""
    return "".join(
        difflib.unified_diff(old, new, fromfile=f"{path} (existing)", tofile=f"{path} (new)")
    )
