"""Exception hierarchy for the bootstrap command.

Every error that aborts a bootstrap run derives from ``BootstrapError`` so the
CLI can report it with a single handler.
"""

from __future__ import annotations

from pathlib import Path


class BootstrapError(Exception):
    """Base class for errors that abort a bootstrap run."""


class UnrecognizedTemplateOption(BootstrapError):
    """Raised when a programmatic template override uses an unknown key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unrecognized template option: {key}")


class PromptError(BootstrapError):
    """Raised when an interactive prompt cannot be answered (no TTY, EOF, ^C)."""


class GenerationError(BootstrapError):
    """Raised when a template file cannot be read, rendered, or written."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        super().__init__(f"{self.path}: {message}")


class ConflictAborted(BootstrapError):
    """Raised when the user aborts during conflict resolution."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Aborted while resolving conflict on {self.path}")


class InstallError(BootstrapError):
    """Raised when dependency installation fails."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)
