"""Shared pytest fixtures for the oghliner test suite.

Provides reusable fixtures for:
- Temporary git repositories (with and without an ``origin`` remote)
- A recording Rich console
- Fake terminal / non-terminal stdin objects
- Small throwaway template trees
"""

from __future__ import annotations

import io
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console


# ---------------------------------------------------------------------------
# Git repositories
# ---------------------------------------------------------------------------

def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Temporary git repository without any remote."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()
    _git("init", cwd=repo_dir)
    yield repo_dir


@pytest.fixture
def make_git_repo(tmp_path: Path):
    """Factory creating ``tmp_path/<name>`` as a git repo with an origin remote."""

    def _make(name: str, remote_url: str | None = None) -> Path:
        repo_dir = tmp_path / name
        repo_dir.mkdir(parents=True)
        _git("init", cwd=repo_dir)
        if remote_url is not None:
            _git("remote", "add", "origin", remote_url, cwd=repo_dir)
        return repo_dir

    return _make


# ---------------------------------------------------------------------------
# Console & stdin
# ---------------------------------------------------------------------------

@pytest.fixture
def record_console() -> Console:
    """Console writing plain text into an in-memory buffer.

    Read the output back with ``record_console.file.getvalue()``.
    """
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def tty_stdin() -> MagicMock:
    """Stand-in for a terminal stdin (prompts themselves are patched)."""
    stdin = MagicMock()
    stdin.isatty.return_value = True
    return stdin


@pytest.fixture
def pipe_stdin() -> io.StringIO:
    """Stand-in for a non-interactive stdin."""
    return io.StringIO("")


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

@pytest.fixture
def small_template_dir(tmp_path: Path) -> Path:
    """A three-file template tree plus an excluded worker template."""
    root = tmp_path / "templates"
    (root / "app").mkdir(parents=True)
    (root / "README.md.j2").write_text("# {{ name }}\n\n{{ description }}\n", encoding="utf-8")
    (root / "gitignore.j2").write_text("node_modules/\n", encoding="utf-8")
    (root / "app" / "logo.bin").write_bytes(b"\x89PNG\x00{{ name }}")
    (root / "app" / "offline-worker.js.j2").write_text("// {{ name }}\n", encoding="utf-8")
    return root
