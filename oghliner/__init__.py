"""oghliner -- bootstrap offline-capable web apps from a bundled template.

Quick usage::

    import asyncio
    from oghliner import BootstrapSettings, bootstrap

    settings = BootstrapSettings(root_dir="./myapp", template={"description": "X"})
    asyncio.run(bootstrap(settings))
"""

__version__ = "1.0.0"

from oghliner.bootstrap import BootstrapResult, bootstrap
from oghliner.config import DEFAULT_TEMPLATE_CONFIG, BootstrapSettings, TemplateConfig
from oghliner.errors import (
    BootstrapError,
    ConflictAborted,
    GenerationError,
    InstallError,
    PromptError,
    UnrecognizedTemplateOption,
)

__all__ = [
    "__version__",
    # Orchestration
    "bootstrap",
    "BootstrapResult",
    # Configuration
    "BootstrapSettings",
    "TemplateConfig",
    "DEFAULT_TEMPLATE_CONFIG",
    # Errors
    "BootstrapError",
    "UnrecognizedTemplateOption",
    "PromptError",
    "GenerationError",
    "ConflictAborted",
    "InstallError",
]
