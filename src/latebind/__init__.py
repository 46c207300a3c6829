"""Latebind package initialisation."""

from importlib import metadata

from .loader import ModuleLoader
from .registry import ModuleNotFoundError, ModuleRegistry
from .types import Factory, ModuleRecord, Resolver


def _discover_version() -> str:
    """Return the installed package version, falling back to dev marker."""
    try:
        return metadata.version("latebind")
    except metadata.PackageNotFoundError:  # pragma: no cover - occurs in editable installs
        return "0.0.0"


__all__ = [
    "__version__",
    "Factory",
    "ModuleLoader",
    "ModuleNotFoundError",
    "ModuleRecord",
    "ModuleRegistry",
    "Resolver",
]
__version__ = _discover_version()
