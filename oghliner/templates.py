"""Jinja2 rendering of the bundled app template.

Provides the TemplateRenderer class which enumerates the files under the
``oghliner/templates/`` directory and renders the ``.j2`` ones with the
template configuration.  Files without the ``.j2`` suffix (images and other
binary assets) are passed through byte-for-byte.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_SUFFIX = ".j2"

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders files of the app template tree.

    Template paths are always POSIX-style and relative to the template root,
    e.g. ``"app/index.html.j2"``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
        )
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["title_case"] = _title_case_filter

    # -- Enumeration -------------------------------------------------------

    def list_templates(self, exclude: Iterable[str] = ()) -> list[str]:
        """Return every file of the template tree, sorted, minus *exclude*."""
        if not self.template_dir.is_dir():
            return []
        excluded = set(exclude)
        paths = (
            p.relative_to(self.template_dir).as_posix()
            for p in self.template_dir.rglob("*")
            if p.is_file()
        )
        return sorted(p for p in paths if p not in excluded)

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single ``.j2`` template with the provided context."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_bytes(self, template_path: str, context: dict[str, Any]) -> bytes:
        """Return the output content of *template_path* as bytes.

        ``.j2`` files are rendered and UTF-8 encoded, anything else is read
        verbatim.
        """
        if is_template(template_path):
            return self.render(template_path, context).encode("utf-8")
        return (self.template_dir / template_path).read_bytes()


def is_template(path: str) -> bool:
    """Whether *path* is rendered (as opposed to copied verbatim)."""
    return path.endswith(TEMPLATE_SUFFIX)


def output_name(path: str) -> str:
    """Strip the ``.j2`` suffix from a template path, if present."""
    return path[: -len(TEMPLATE_SUFFIX)] if is_template(path) else path


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _title_case_filter(value: str) -> str:
    """Convert ``my-app`` or ``my_app`` to ``My App``."""
    parts = re.split(r"[-_\s]+", value)
    return " ".join(word.capitalize() for word in parts if word)
