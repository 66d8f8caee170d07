"""npm dependency installation for a freshly generated app."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from oghliner.errors import InstallError
from oghliner.utils import run_command

MANIFEST = "package.json"


@dataclass
class InstallResult:
    """Outcome of the installation step."""

    skipped: bool
    command: str = ""
    stdout: str = ""


async def install_dependencies(
    root_dir: str | Path,
    npm_command: str = "npm",
    timeout: float = 600,
) -> InstallResult:
    """Run ``npm install`` in *root_dir*.

    Nothing is run when the directory has no ``package.json``.

    Raises:
        InstallError: If npm cannot be started, times out or exits non-zero.
    """
    root = Path(root_dir)
    if not (root / MANIFEST).is_file():
        return InstallResult(skipped=True)

    cmd = [npm_command, "install"]
    cmd_str = " ".join(cmd)
    try:
        returncode, stdout, stderr = await run_command(cmd, cwd=root, timeout=timeout)
    except OSError as exc:
        raise InstallError(f"Cannot run {cmd_str}: {exc}", command=cmd_str) from exc

    if returncode != 0:
        raise InstallError(
            f"{cmd_str} failed (exit {returncode})\n{stderr}".rstrip(),
            command=cmd_str,
            stderr=stderr,
        )
    return InstallResult(skipped=False, command=cmd_str, stdout=stdout)
