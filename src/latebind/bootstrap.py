"""Wire manifest entries into a loader and resolve the entry module."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from .config import Config
from .loader import ModuleLoader
from .types import Factory

LOGGER = logging.getLogger(__name__)


class BootstrapError(RuntimeError):
    """Raised when a manifest cannot be turned into a runnable loader."""


def import_factory(reference: str) -> Factory:
    """Import the callable named by a ``package.module:attribute`` reference."""

    module_path, sep, attribute = reference.partition(":")
    if not sep or not module_path or not attribute:
        raise BootstrapError(
            f"Invalid factory reference '{reference}'; expected 'package.module:attribute'."
        )

    try:
        target: Any = importlib.import_module(module_path)
    except ImportError as exc:
        raise BootstrapError(f"Cannot import '{module_path}' for '{reference}': {exc}") from exc

    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise BootstrapError(f"'{module_path}' has no attribute '{attribute}'.") from exc

    if not callable(target):
        raise BootstrapError(f"Factory reference '{reference}' is not callable.")
    return target


def build_loader(config: Config) -> ModuleLoader:
    """Return a loader with every manifest module registered, in manifest order."""

    loader = ModuleLoader()
    for name, reference in config.modules.items():
        loader.register(name, import_factory(reference))
    LOGGER.info("Registered %s module(s)", len(loader.registry))
    return loader


def run_entry(config: Config, entry: str | None = None) -> tuple[ModuleLoader, Any]:
    """Build a loader from ``config`` and resolve the entry module."""

    target = entry or config.entry
    if not target:
        raise BootstrapError("No entry module given and none configured under 'entry'.")

    loader = build_loader(config)
    LOGGER.info("Resolving entry module '%s'", target)
    exports = loader.resolve(target)
    LOGGER.info(
        "Entry module '%s' resolved; %s module(s) instantiated",
        target,
        len(loader.module_names),
    )
    return loader, exports


__all__ = ["BootstrapError", "build_loader", "import_factory", "run_entry"]
