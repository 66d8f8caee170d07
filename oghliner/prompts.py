"""Template configuration acquisition.

Two mutually exclusive modes:

* programmatic -- ``apply_overrides`` merges caller-supplied values into the
  defaults, rejecting unknown keys;
* interactive -- ``ConfigPrompter`` shows the defaults and, if the user wants
  to change them, asks for each value in a fixed order.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Mapping
from typing import Any, TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt

from oghliner.config import TemplateConfig
from oghliner.errors import PromptError, UnrecognizedTemplateOption
from oghliner.reporter import ProgressReporter

# (label, key) pairs, asked in this order.
PROMPT_FIELDS: tuple[tuple[str, str], ...] = (
    ("Name", "name"),
    ("Repository", "repository"),
    ("Description", "description"),
    ("License", "license"),
)


def apply_overrides(defaults: TemplateConfig, overrides: Mapping[str, Any]) -> TemplateConfig:
    """Return *defaults* with the values of *overrides* applied.

    Raises:
        UnrecognizedTemplateOption: On the first key that is not a template
            configuration key.
    """
    recognized = set(TemplateConfig.recognized_keys())
    for key in overrides:
        if key not in recognized:
            raise UnrecognizedTemplateOption(key)
    return defaults.model_copy(update={key: str(value) for key, value in overrides.items()})


class ConfigPrompter:
    """Asks the user whether and how to change the default configuration.

    *stdin* is only used to check for a terminal (``isatty()``) before the
    first question; Rich reads the answers through the console.
    """

    def __init__(
        self,
        console: Console | None = None,
        stdin: TextIO | None = None,
    ) -> None:
        self.reporter = ProgressReporter(console)
        self.console = self.reporter.console
        self.stdin = stdin if stdin is not None else sys.stdin

    def _ensure_interactive(self) -> None:
        isatty = getattr(self.stdin, "isatty", None)
        if not (isatty and isatty()):
            raise PromptError(
                "Cannot prompt for the app configuration: stdin is not a terminal. "
                "Pass template values explicitly instead."
            )

    async def _ask(self, func: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args, console=self.console, **kwargs)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptError("Prompt was interrupted before an answer was given") from exc

    async def prompt(self, defaults: TemplateConfig) -> TemplateConfig:
        """Interactively confirm or edit *defaults*."""
        self._ensure_interactive()
        self.reporter.show_config(defaults)

        change = await self._ask(
            Confirm.ask, "Would you like to change its configuration?", default=False
        )
        if not change:
            return defaults

        self.console.print("\n")
        answers: dict[str, str] = {}
        for label, key in PROMPT_FIELDS:
            default = getattr(defaults, key)
            answer = await self._ask(Prompt.ask, f"[bold]{label}:[/bold]", default=default)
            answers[key] = (answer or "").strip() or default

        return TemplateConfig(**answers)


async def acquire_config(
    defaults: TemplateConfig,
    overrides: Mapping[str, Any] | None,
    prompter: ConfigPrompter | None = None,
) -> TemplateConfig:
    """Select programmatic or interactive mode and return the chosen config."""
    if overrides is not None:
        return apply_overrides(defaults, overrides)
    prompter = prompter or ConfigPrompter()
    return await prompter.prompt(defaults)
