"""Typed configuration for the bootstrap command.

Two models live here: ``TemplateConfig`` holds the values substituted into the
template files, and ``BootstrapSettings`` holds the knobs that control a run
(destination, install step, conflict strategy).  Both are Pydantic v2 models so
bad values are rejected at construction time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Copied into the app by the ``offline`` step, never by bootstrap.
WORKER_TEMPLATE = "app/offline-worker.js.j2"

ConflictStrategy = Literal["ask", "overwrite", "skip"]


class TemplateConfig(BaseModel):
    """Values substituted into the template files.

    Instances are frozen: every change goes through ``model_copy`` and yields
    a new object, so a finalized configuration can be shared safely with the
    file generation pipeline.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    repository: str
    description: str
    license: str
    oghliner_version: str | None = Field(
        default=None, description="Version of the tool that rendered the templates"
    )

    @classmethod
    def recognized_keys(cls) -> tuple[str, ...]:
        """Keys a user may set, in prompt order."""
        return ("name", "repository", "description", "license")

    def finalize(self, version: str) -> "TemplateConfig":
        """Return a copy with the version marker attached."""
        return self.model_copy(update={"oghliner_version": version})

    def as_context(self) -> dict[str, Any]:
        """Return the Jinja2 rendering context."""
        return self.model_dump()

    def to_rows(self) -> list[tuple[str, str]]:
        """Return ``(Label, value)`` pairs for the user-facing keys."""
        return [(key[:1].upper() + key[1:], getattr(self, key)) for key in self.recognized_keys()]


DEFAULT_TEMPLATE_CONFIG = TemplateConfig(
    name="oghliner-template-app",
    repository="https://oghliner-template-app.git",
    description="A template app bootstrapped with oghliner.",
    license="Apache-2.0",
)


class BootstrapSettings(BaseModel):
    """Settings for a single bootstrap run.

    ``template`` selects the configuration mode: when it is ``None`` the user is
    prompted interactively, otherwise its entries override the resolved
    defaults without any interaction.
    """

    root_dir: Path = Field(default=Path("."), description="Destination directory")
    template: dict[str, Any] | None = Field(
        default=None, description="Programmatic template overrides"
    )
    install: bool = Field(default=True, description="Run npm install after generating files")
    npm_command: str = Field(default="npm")
    install_timeout: int = Field(default=600, ge=10, description="npm install timeout in seconds")
    conflict_strategy: ConflictStrategy = Field(default="ask")
    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)
    worker_template: str = Field(default=WORKER_TEMPLATE)

    @classmethod
    def from_env(cls, **overrides: Any) -> "BootstrapSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            OGHLINER_ROOT_DIR, OGHLINER_NPM, OGHLINER_INSTALL_TIMEOUT,
            OGHLINER_SKIP_INSTALL, OGHLINER_CONFLICT.

        Keyword arguments take precedence over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("OGHLINER_ROOT_DIR"):
            kwargs["root_dir"] = Path(os.environ["OGHLINER_ROOT_DIR"])
        if os.environ.get("OGHLINER_NPM"):
            kwargs["npm_command"] = os.environ["OGHLINER_NPM"]
        if os.environ.get("OGHLINER_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["OGHLINER_INSTALL_TIMEOUT"])
        if os.environ.get("OGHLINER_SKIP_INSTALL", "").lower() in ("1", "true", "yes"):
            kwargs["install"] = False
        if os.environ.get("OGHLINER_CONFLICT"):
            kwargs["conflict_strategy"] = os.environ["OGHLINER_CONFLICT"]

        kwargs.update(overrides)
        return cls(**kwargs)
