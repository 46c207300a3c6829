"""Lazy, cached instantiation of registered modules."""

from __future__ import annotations

import logging
from typing import Any

from .registry import ModuleNotFoundError, ModuleRegistry
from .types import Factory, ModuleRecord

LOGGER = logging.getLogger(__name__)


class ModuleLoader:
    """Resolve module names to their exports, running each factory at most once.

    A record is cached before its factory runs. A factory that (directly or
    transitively) requests its own name again receives the exports in their
    current, possibly incomplete state instead of triggering a second run.
    """

    def __init__(self, registry: ModuleRegistry | None = None) -> None:
        self._registry = registry if registry is not None else ModuleRegistry()
        self._records: dict[str, ModuleRecord] = {}

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    def register(self, name: str, factory: Factory) -> None:
        """Register ``factory`` under ``name`` with the owned registry."""
        self._registry.register(name, factory)

    def resolve(self, name: str) -> Any:
        """Return the exports of ``name``, instantiating the module on first use."""
        record = self._records.get(name)
        if record is not None:
            if not record.initialized:
                LOGGER.debug("Module '%s' is still initialising, returning partial exports", name)
            return record.exports

        factory = self._registry.get(name)
        record = ModuleRecord(name=name)
        self._records[name] = record

        LOGGER.debug("Initialising module '%s'", name)
        try:
            factory(record, record.exports, self.resolve)
        except Exception:
            LOGGER.exception("Module '%s' factory failed", name)
            raise
        record.initialized = True
        LOGGER.debug("Module '%s' initialised", name)
        return record.exports

    require = resolve

    def record(self, name: str) -> ModuleRecord:
        """Return the cached record for ``name``."""
        try:
            return self._records[name]
        except KeyError as exc:
            raise ModuleNotFoundError(name) from exc

    def is_loaded(self, name: str) -> bool:
        """Return True once ``name`` has been requested, even mid-initialisation."""
        return name in self._records

    def is_initialized(self, name: str) -> bool:
        record = self._records.get(name)
        return record is not None and record.initialized

    @property
    def module_names(self) -> list[str]:
        """Return instantiated module names in instantiation order."""
        return list(self._records)


__all__ = ["ModuleLoader", "ModuleNotFoundError"]
