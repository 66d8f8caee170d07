"""File generation pipeline.

Streams every file of the app template through four stages, one file at a
time::

    normalize name -> render -> resolve conflict -> write

The offline worker template is excluded: it is copied by the ``offline`` step,
not by bootstrap.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from jinja2 import TemplateError

from oghliner.config import BootstrapSettings, TemplateConfig
from oghliner.conflict import ConflictDecision, ConflictResolver
from oghliner.errors import GenerationError
from oghliner.reporter import ProgressReporter
from oghliner.templates import TemplateRenderer, output_name

# npm refuses to publish files with these names when they carry their dot,
# so the template ships them without it.
DOTFILE_NAMES = frozenset({"gitignore", "nojekyll"})


@dataclass
class RenderedFile:
    """A template file on its way to the destination root."""

    source: str
    destination: str
    content: bytes = b""


@dataclass
class GenerationResult:
    """Relative destination paths grouped by what happened to them."""

    written: list[str] = field(default_factory=list)
    identical: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def normalize_name(path: str) -> str:
    """Dot-prefix reserved file names and drop the ``.j2`` suffix.

    >>> normalize_name("gitignore.j2")
    '.gitignore'
    >>> normalize_name("app/nojekyll")
    'app/.nojekyll'
    """
    out = PurePosixPath(output_name(path))
    if out.stem in DOTFILE_NAMES:
        out = out.with_name("." + out.name)
    return out.as_posix()


class FileGenerator:
    """Materializes the app template into ``settings.root_dir``."""

    def __init__(
        self,
        settings: BootstrapSettings,
        renderer: TemplateRenderer | None = None,
        resolver: ConflictResolver | None = None,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self.settings = settings
        self.root_dir = Path(settings.root_dir)
        self.renderer = renderer or TemplateRenderer(settings.template_dir)
        self.resolver = resolver or ConflictResolver(self.root_dir, settings.conflict_strategy)
        self.reporter = reporter or ProgressReporter()

    # -- Public API --------------------------------------------------------

    async def generate(self, config: TemplateConfig) -> GenerationResult:
        """Run every template file through the pipeline.

        Raises:
            GenerationError: If a file cannot be read, rendered or written.
                Files written before the failure stay on disk.
            ConflictAborted: If the user aborts conflict resolution.
        """
        result = GenerationResult()
        context = config.as_context()

        async for rendered in self._render_all(context):
            decision = await self.resolver.resolve(rendered.destination, rendered.content)
            if decision.writes:
                await self._write(rendered)

            if decision is ConflictDecision.SKIP:
                result.skipped.append(rendered.destination)
                self.reporter.file_skipped(rendered.destination)
                continue

            if decision is ConflictDecision.IDENTICAL:
                result.identical.append(rendered.destination)
            else:
                result.written.append(rendered.destination)
            self.reporter.file_written(rendered.destination)

        return result

    # -- Stages ------------------------------------------------------------

    async def _render_all(self, context: dict) -> AsyncIterator[RenderedFile]:
        """Yield normalized, rendered files in enumeration order."""
        sources = self.renderer.list_templates(exclude=[self.settings.worker_template])
        for source in sources:
            rendered = RenderedFile(source=source, destination=normalize_name(source))
            try:
                rendered.content = await asyncio.to_thread(
                    self.renderer.render_bytes, source, context
                )
            except (OSError, TemplateError, UnicodeError) as exc:
                raise GenerationError(source, f"cannot render template: {exc}") from exc
            yield rendered

    async def _write(self, rendered: RenderedFile) -> None:
        target = self.root_dir / rendered.destination
        try:
            await asyncio.to_thread(_write_file, target, rendered.content)
        except OSError as exc:
            raise GenerationError(rendered.destination, f"cannot write file: {exc}") from exc


def _write_file(path: Path, content: bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
