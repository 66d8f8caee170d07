"""Bootstrap orchestrator.

Sequences the phases of a bootstrap run, each awaited before the next starts:

1. resolve the default template configuration from the target directory;
2. acquire the final configuration (programmatic overrides or prompts);
3. generate the files;
4. install npm dependencies.

Any error aborts the run and propagates to the caller; files written before
the error are left in place.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from oghliner import __version__
from oghliner.config import BootstrapSettings, TemplateConfig
from oghliner.conflict import ConflictResolver
from oghliner.defaults import resolve_defaults
from oghliner.errors import InstallError
from oghliner.generator import FileGenerator, GenerationResult
from oghliner.installer import InstallResult, install_dependencies
from oghliner.prompts import ConfigPrompter, acquire_config
from oghliner.reporter import ProgressReporter


@dataclass
class BootstrapResult:
    """What a completed bootstrap run produced."""

    config: TemplateConfig
    generation: GenerationResult
    install: InstallResult


async def bootstrap(
    settings: BootstrapSettings | None = None,
    *,
    console: Console | None = None,
    prompter: ConfigPrompter | None = None,
    resolver: ConflictResolver | None = None,
) -> BootstrapResult:
    """Bootstrap an Oghliner app into ``settings.root_dir``.

    Args:
        settings: Run settings.  Defaults to the current directory and
            interactive configuration.
        console: Console for all output (the shared one by default).
        prompter: Interactive prompter, used when ``settings.template`` is None.
        resolver: Conflict resolver for files that already exist.

    Raises:
        UnrecognizedTemplateOption: Before any file is touched.
        PromptError: If a prompt cannot be answered.
        GenerationError: If a file cannot be rendered or written.
        ConflictAborted: If the user aborts conflict resolution.
        InstallError: If ``npm install`` fails.
    """
    settings = settings or BootstrapSettings()
    reporter = ProgressReporter(console)

    reporter.banner(settings.root_dir)

    defaults = await resolve_defaults(settings.root_dir)
    config = await acquire_config(
        defaults,
        settings.template,
        prompter or ConfigPrompter(reporter.console),
    )
    config = config.finalize(__version__)

    reporter.creating_files()
    generator = FileGenerator(
        settings,
        resolver=resolver
        or ConflictResolver(settings.root_dir, settings.conflict_strategy, reporter.console),
        reporter=reporter,
    )
    generation = await generator.generate(config)
    reporter.files_done()

    if settings.install:
        try:
            with reporter.installing():
                install = await install_dependencies(
                    settings.root_dir, settings.npm_command, settings.install_timeout
                )
        except InstallError as exc:
            reporter.install_failed(exc.stderr or str(exc))
            raise
        if install.skipped:
            reporter.install_skipped()
        else:
            reporter.install_done()
    else:
        install = InstallResult(skipped=True)
        reporter.install_skipped()

    reporter.next_steps()
    return BootstrapResult(config=config, generation=generation, install=install)
