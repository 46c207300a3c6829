"""Name to factory bookkeeping."""

from __future__ import annotations

import builtins
import logging
from collections.abc import Callable

from .types import Factory

LOGGER = logging.getLogger(__name__)


class ModuleNotFoundError(builtins.ModuleNotFoundError):
    """Raised when a module name was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Module '{name}' does not exist.", name=name)


class ModuleRegistry:
    """Registry of not-yet-executed module factories."""

    def __init__(self) -> None:
        self._factories: dict[str, Factory] = {}

    def register(self, name: str, factory: Factory) -> None:
        """Store ``factory`` under ``name``, replacing any earlier registration."""
        if name in self._factories:
            LOGGER.debug("Module '%s' already registered, replacing", name)
        else:
            LOGGER.debug("Registered module '%s'", name)
        self._factories[name] = factory

    def define(self, name: str) -> Callable[[Factory], Factory]:
        """Decorator that registers the wrapped function as the factory for ``name``."""

        def decorator(factory: Factory) -> Factory:
            self.register(name, factory)
            return factory

        return decorator

    def get(self, name: str) -> Factory:
        try:
            return self._factories[name]
        except KeyError as exc:
            raise ModuleNotFoundError(name) from exc

    @property
    def names(self) -> list[str]:
        """Return registered module names in registration order."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


__all__ = ["ModuleNotFoundError", "ModuleRegistry"]
