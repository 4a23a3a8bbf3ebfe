"""
DTOFORGE - DTO parameter derivation for schema-driven code generators.

Derives, from annotated schema entities, the field sets, type overrides and
import lists needed to render a read-model entity, a create DTO and an
update DTO per entity.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.config import GeneratorConfig
from .core.errors import ConfigError, DtoForgeError, RelationResolutionError


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("dtoforge")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "GeneratorConfig",
    "DtoForgeError",
    "ConfigError",
    "RelationResolutionError",
]
