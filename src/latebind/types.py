"""Core data structures shared by the registry and the loader."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Protocol

Resolver = Callable[[str], Any]


@dataclass(slots=True)
class ModuleRecord:
    """Cached state of a module that has been requested at least once.

    ``exports`` starts out as an empty module object. Factories populate it in
    place, or replace it outright by assigning ``record.exports``.
    """

    name: str
    exports: Any = field(default=None)
    initialized: bool = False

    def __post_init__(self) -> None:
        if self.exports is None:
            self.exports = ModuleType(self.name)


class Factory(Protocol):
    """Deferred initialisation logic registered under a module name."""

    def __call__(self, module: ModuleRecord, exports: Any, require: Resolver) -> None: ...


__all__ = ["Factory", "ModuleRecord", "Resolver"]
