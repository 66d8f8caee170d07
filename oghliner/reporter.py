"""Human-facing progress output for a bootstrap run.

All output goes through a Rich ``Console``; nothing here is meant to be
parsed by machines.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from oghliner.config import TemplateConfig
from oghliner.utils import console as default_console

CHECK = "[bold green]✓[/bold green] "
CROSS = "[bold red]✗[/bold red] "

DOCS_URL = "https://mozilla.github.io/oghliner/"


class ProgressReporter:
    """Write-only sink for status text and spinners."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def banner(self, root_dir: str | Path) -> None:
        if str(root_dir) in ("", "."):
            target = "current directory"
        else:
            target = f"[bold]{escape(os.path.normpath(str(root_dir)) + os.sep)}[/bold]"
        self.console.print(f"Bootstrapping {target} as Oghliner app…\n")

    def show_config(self, config: TemplateConfig) -> None:
        """Print the key/value listing of *config*."""
        self.console.print("Your app's configuration is:\n")
        for label, value in config.to_rows():
            self.console.print(f"[bold]{label}:[/bold] {escape(value)}")
        self.console.print()

    def creating_files(self) -> None:
        self.console.print("\nCreating files…")

    def file_written(self, path: str | Path) -> None:
        self.console.print(f"{CHECK}{escape(str(path))}")

    def file_skipped(self, path: str | Path) -> None:
        self.console.print(f"[dim]- {escape(str(path))} (skipped)[/dim]")

    def files_done(self) -> None:
        self.console.print(f"\n{CHECK}Creating files… done!")

    @contextmanager
    def installing(self) -> Iterator[None]:
        """Show a spinner while npm dependencies are installed."""
        with self.console.status("  Installing npm dependencies…", spinner="dots"):
            yield

    def install_done(self) -> None:
        self.console.print(f"{CHECK}Installing npm dependencies… done!\n")

    def install_skipped(self) -> None:
        self.console.print("[dim]Skipping npm dependencies.[/dim]\n")

    def install_failed(self, message: str) -> None:
        self.console.print(f"{CROSS}Installing npm dependencies… error!\n")
        if message:
            self.console.print(escape(message), highlight=False)

    def next_steps(self) -> None:
        """Tell the user what to run once the app is bootstrapped."""
        self.console.print(
            "Your app has been bootstrapped! Just commit the changes and push the commit\n"
            "to the origin/master branch:\n"
        )
        self.console.print('[bold]git add --all && git commit -m"initial version of Oghliner app"[/bold]')
        self.console.print("[bold]git push origin master[/bold]\n")
        self.console.print(
            "Then you can build, offline, and deploy the app using "
            "[bold italic]gulp[/bold italic] commands.\n"
        )
        self.console.print(
            "[bold blue]ℹ For more information about building, offlining and deployment, see:\n"
            f"    {DOCS_URL}[/bold blue]"
        )

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")
