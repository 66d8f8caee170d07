"""Command-line entry point for ``oghliner-bootstrap`` / ``python -m oghliner``."""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from oghliner import __version__
from oghliner.bootstrap import bootstrap
from oghliner.config import BootstrapSettings
from oghliner.errors import BootstrapError
from oghliner.reporter import ProgressReporter
from oghliner.utils import console


def _parse_assignment(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key.strip(), val


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oghliner-bootstrap",
        description="Bootstrap an offline-capable Oghliner app from the bundled template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  oghliner-bootstrap\n"
            "  oghliner-bootstrap ./myapp --set description='My app'\n"
            "  oghliner-bootstrap ./myapp --set name=myapp --no-install --overwrite\n"
        ),
    )
    parser.add_argument(
        "root_dir",
        nargs="?",
        default=None,
        help="Directory to bootstrap (default: current directory)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        metavar="KEY=VALUE",
        action="append",
        type=_parse_assignment,
        help="Set a template value (name, repository, description, license) "
        "instead of prompting; may be repeated",
    )
    parser.add_argument(
        "--no-install",
        dest="install",
        action="store_false",
        default=None,
        help="Do not run npm install after creating the files",
    )
    parser.add_argument("--npm", dest="npm_command", default=None, help="npm executable to use")
    parser.add_argument(
        "--install-timeout",
        type=int,
        default=None,
        help="Seconds to wait for npm install (default: 600)",
    )
    strategy = parser.add_mutually_exclusive_group()
    strategy.add_argument(
        "--overwrite",
        dest="conflict_strategy",
        action="store_const",
        const="overwrite",
        help="Overwrite existing files without asking",
    )
    strategy.add_argument(
        "--skip-existing",
        dest="conflict_strategy",
        action="store_const",
        const="skip",
        help="Keep existing files without asking",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> BootstrapSettings:
    """Merge parsed arguments on top of the environment-derived settings."""
    overrides: dict = {}
    if args.root_dir is not None:
        overrides["root_dir"] = args.root_dir
    if args.assignments:
        overrides["template"] = dict(args.assignments)
    for name in ("install", "npm_command", "install_timeout", "conflict_strategy"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return BootstrapSettings.from_env(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    reporter = ProgressReporter(console)

    try:
        settings = settings_from_args(args)
    except (ValidationError, ValueError) as exc:
        reporter.error(f"Invalid settings: {exc}")
        return 1

    try:
        asyncio.run(bootstrap(settings, console=console))
    except BootstrapError as exc:
        reporter.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
