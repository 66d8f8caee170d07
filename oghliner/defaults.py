"""Default template configuration derived from the target directory.

The built-in defaults are enriched, on a best-effort basis, with the URL of the
directory's ``origin`` git remote.  Failing to read the remote is not an
error: the defaults are simply kept.
"""

from __future__ import annotations

from pathlib import Path

from oghliner.config import DEFAULT_TEMPLATE_CONFIG, TemplateConfig
from oghliner.utils import run_command

_GIT_SUFFIX = ".git"


async def get_remote_url(
    directory: str | Path, remote: str = "origin", timeout: float = 10
) -> str | None:
    """Return the URL of *remote* for the repository at *directory*, or ``None``."""
    try:
        returncode, stdout, _ = await run_command(
            ["git", "config", "--get", f"remote.{remote}.url"],
            cwd=directory,
            timeout=timeout,
        )
    except Exception:
        # git missing, directory missing, ... -- all mean "no remote".
        return None
    if returncode != 0 or not stdout:
        return None
    return stdout.splitlines()[0].strip()


def derive_name(url: str) -> str | None:
    """Derive a project name from a repository URL ending in ``.git``.

    ``git@host:user/myapp.git`` -> ``myapp``.  Returns ``None`` when the URL
    does not end in ``.git``.
    """
    if not url.endswith(_GIT_SUFFIX):
        return None
    return url[url.rfind("/") + 1 : -len(_GIT_SUFFIX)]


async def resolve_defaults(directory: str | Path) -> TemplateConfig:
    """Build the default ``TemplateConfig`` for *directory*."""
    url = await get_remote_url(directory)
    if url is None:
        return DEFAULT_TEMPLATE_CONFIG

    update = {"repository": url}
    name = derive_name(url)
    if name:
        update["name"] = name
    return DEFAULT_TEMPLATE_CONFIG.model_copy(update=update)
